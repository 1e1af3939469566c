"""
Entry point for running Drill as a module.

Usage:
    python -m drillcards.delivery study
    python -m drillcards.delivery decks
    python -m drillcards.delivery --help
"""
from .cli import main

if __name__ == "__main__":
    main()
