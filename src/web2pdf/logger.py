"""
Tiny façade over :pymod:`logging` so internal modules can do

```python
from web2pdf.logger import log
log.debug("Hi")
```

and end-users can tweak verbosity via the environment:

```bash
export W2P_LOGLEVEL=DEBUG
```
"""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

from web2pdf.constants import LOGLEVEL_ENV

_PLAIN_FMT = "%(asctime)s  %(levelname)-8s  %(name)s › %(message)s"

log = logging.getLogger("web2pdf")

# shared with the progress bar so log lines render above it
console = Console(stderr=True)


def _level(verbose: int) -> int:
    env_level = os.getenv(LOGLEVEL_ENV)
    if env_level:
        return getattr(logging, env_level.upper(), logging.INFO)
    return logging.DEBUG if verbose >= 1 else logging.INFO


def configure_logging(verbose: int = 0, ansi_only: bool = False) -> None:
    """
    Initialize root logging once. If W2P_LOGLEVEL is set it overrides verbosity.
    Verbosity: 0 => INFO, >=1 => DEBUG.

    ``ansi_only`` swaps the Rich handler for a plain stderr stream handler,
    which is what CI logs and non-interactive pipes want.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    if ansi_only:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_PLAIN_FMT))
    else:
        handler = RichHandler(
            console=console,
            show_time=False,
            show_level=True,
            show_path=False,
            markup=False,
        )
    logging.basicConfig(level=_level(verbose), handlers=[handler])
