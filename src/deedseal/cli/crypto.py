import click
import json
import sys

from deedseal.config import ENCRYPTION_KEY_ENV
from deedseal.lib import aead, listing
from deedseal.lib.errors import DeedSealError, InvalidKey

key_option = click.option(
    "--key",
    envvar=ENCRYPTION_KEY_ENV,
    required=True,
    help=f"Base64 AES-256 key (defaults to ${ENCRYPTION_KEY_ENV}).",
)


@click.command("gen-key")
@click.option(
    "--write-env",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Append the key to this .env file.",
)
def gen_key(write_env):
    """Generates a new 256-bit encryption key."""
    key = aead.generate_key()
    if write_env:
        with open(write_env, "a", encoding="utf-8") as f:
            f.write(f"{ENCRYPTION_KEY_ENV}={key}\n")
        click.echo(f"Appended {ENCRYPTION_KEY_ENV} to {write_env}", err=True)
    click.echo(key)


@click.command("seal")
@click.argument("plaintext", required=False)
@key_option
def seal(plaintext, key):
    """Encrypts a canonical record (argument or stdin)."""
    if plaintext is None:
        plaintext = sys.stdin.read().rstrip("\n")
    try:
        click.echo(aead.seal(plaintext, key))
    except DeedSealError as e:
        raise click.ClickException(str(e))


@click.command("open")
@click.argument("payload")
@key_option
@click.option("--json", "as_json", is_flag=True, help="Print the decoded deed fields.")
def open_(payload, key, as_json):
    """Decrypts a sealed payload."""
    try:
        if as_json:
            fields = listing.read_listing(payload, key)
            if fields is None:
                raise click.ClickException("undecryptable")
            click.echo(json.dumps(fields.to_wire(), indent=2))
        else:
            click.echo(aead.open_payload(payload, key))
    except InvalidKey as e:
        raise click.ClickException(str(e))
    except DeedSealError as e:
        raise click.ClickException(f"undecryptable: {e}")
