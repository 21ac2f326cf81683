"""Entry point for ``python -m task_service``."""

from task_service.cli import main

if __name__ == "__main__":
    main()
