"""Allow ``python -m catalogkit``."""

from catalogkit.main import main

main()
