"""Handler for 'jiraban config'."""

from jiraban.cli._common import load_config_or_die, output_json


def show_config(args) -> int:
    """Print the resolved configuration with the token masked."""
    config = load_config_or_die(args.env_file, args.json)
    data = config.as_dict()

    if args.json:
        output_json(data)
    else:
        for key, value in data.items():
            print(f"{key:<14} {value if value is not None else ''}")

    return 0
