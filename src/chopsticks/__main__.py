"""Allow running as ``python -m chopsticks``."""

from .core import main

main()
