import click
import json
from pathlib import Path

from deedseal.lib import identifier, record
from deedseal.lib.errors import DeedSealError
from deedseal.lib.record import DeedFields


@click.command("encode")
@click.option("--no-hakmilik", default="", help="Title number (NoHakmilik).")
@click.option("--no-bangunan", default="", help="Building number (NoBangunan).")
@click.option("--no-tingkat", default="", help="Floor number (NoTingkat).")
@click.option("--no-petak", default="", help="Parcel number (NoPetak).")
@click.option("--negeri", default="", help="State (Negeri).")
@click.option("--daerah", default="", help="District (Daerah).")
@click.option("--bandar", default="", help="Town (Bandar).")
@click.option("--owner", required=True, help="Owner wallet address.")
def encode(no_hakmilik, no_bangunan, no_tingkat, no_petak, negeri, daerah, bandar, owner):
    """Prints the canonical record for a set of deed fields."""
    fields = DeedFields(
        no_hakmilik=no_hakmilik,
        no_bangunan=no_bangunan,
        no_tingkat=no_tingkat,
        no_petak=no_petak,
        negeri=negeri,
        daerah=daerah,
        bandar=bandar,
        owner=owner,
    )
    for name in record.delimiter_conflicts(fields):
        click.echo(f"Warning: {name} contains a separator character", err=True)
    click.echo(record.encode(fields))


@click.command("decode")
@click.argument("plaintext")
def decode(plaintext):
    """Prints the deed fields of a canonical record as JSON."""
    try:
        fields = record.decode(plaintext)
    except DeedSealError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(fields.to_wire(), indent=2))


@click.command("derive-id")
@click.argument("plaintext")
def derive_id(plaintext):
    """Prints the content-keyed identifier of a canonical record."""
    click.echo(identifier.derive_deterministic(plaintext))


@click.command("gen-id")
@click.argument("plaintext")
@click.option(
    "--existing",
    multiple=True,
    help="An identifier already in use (repeatable).",
)
@click.option(
    "--existing-file",
    type=click.Path(exists=True, dir_okay=False),
    help="File with one identifier in use per line.",
)
def gen_id(plaintext, existing, existing_file):
    """Generates an identifier not already in use."""
    taken = set()
    try:
        for value in existing:
            taken.add(identifier.normalize_identifier(value))
        if existing_file:
            for line in Path(existing_file).read_text(encoding="utf-8").splitlines():
                if line.strip():
                    taken.add(identifier.normalize_identifier(line))
        id_hex = identifier.generate(plaintext, taken)
    except DeedSealError as e:
        raise click.ClickException(str(e))
    click.echo(id_hex)


@click.command("to-decimal")
@click.argument("id_hex")
def to_decimal(id_hex):
    """Prints the decimal on-chain key of an identifier."""
    try:
        click.echo(identifier.to_decimal(identifier.normalize_identifier(id_hex)))
    except DeedSealError as e:
        raise click.ClickException(str(e))


@click.command("from-decimal")
@click.argument("numeral")
def from_decimal(numeral):
    """Prints the identifier for a decimal on-chain key."""
    try:
        click.echo(identifier.from_decimal(numeral))
    except DeedSealError as e:
        raise click.ClickException(str(e))
