"""Allow ``python -m entra_secret_watcher``."""

from .main import main

main()
