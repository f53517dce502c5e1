"""Exit codes for the chrono CLI.

- 0: Success
- 2: Detection error (project root missing or unreadable)
- 3: Invalid usage (bad arguments, bad config, refused overwrite)
- 4: Output error (metadata file could not be written)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_DETECTION_ERROR = 2
EXIT_INVALID_USAGE = 3
EXIT_OUTPUT_ERROR = 4
