import click

from .locate_command import locate


@click.group(help="Locate Active Directory services through DNS.")
def cli():
    pass


cli.add_command(locate)
