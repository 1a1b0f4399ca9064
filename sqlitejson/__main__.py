"""Allow ``python -m sqlitejson``."""

from sqlitejson.cli.main import main_cli

if __name__ == "__main__":
    main_cli()
