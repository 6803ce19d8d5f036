"""
Entry point for running GemForge as a module.

Usage:
    python -m gemforge [command] [options]

Example:
    python -m gemforge init --admin admin
    python -m gemforge mint --caller admin --to alice --staked 100 \
        --mining-power 10 --forging-power 10 --rarity 3
    python -m gemforge mine 0 --owner alice
"""

from gemforge.cli.main import cli

if __name__ == "__main__":
    cli()
