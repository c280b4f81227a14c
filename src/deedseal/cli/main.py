import click

# Import individual commands from modules
from deedseal.cli.records import (
    encode,
    decode,
    derive_id,
    gen_id,
    to_decimal,
    from_decimal,
)
from deedseal.cli.crypto import gen_key, seal, open_


@click.group()
def cli():
    """Seal deed records and manage property identifiers."""
    pass


# Add record and identifier commands
cli.add_command(encode)
cli.add_command(decode)
cli.add_command(derive_id)
cli.add_command(gen_id)
cli.add_command(to_decimal)
cli.add_command(from_decimal)

# Add crypto commands
cli.add_command(gen_key)
cli.add_command(seal)
cli.add_command(open_)


if __name__ == "__main__":
    cli()
