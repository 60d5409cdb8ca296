"""Allow ``python -m keyring_ctl``."""

from keyring_ctl.cli import main

if __name__ == "__main__":
    main()
