import sys

from nix_config_parser.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
