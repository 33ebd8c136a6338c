"""Click CLI entry point with lazy-loaded subcommands."""

import logging

import click

# Lazy-loading command group: imports command modules only when invoked.
# This keeps tree-sitter out of `--help` and `--version`.
_COMMANDS = {
    "extract": ("phpconcepts.commands.cmd_extract", "extract"),
    "scan":    ("phpconcepts.commands.cmd_scan",    "scan"),
}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)


@click.group(cls=LazyGroup)
@click.version_option(package_name="php-concepts")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('-v', '--verbose', is_flag=True, help='Log extraction details to stderr')
@click.pass_context
def cli(ctx, json_mode, verbose):
    """phpconcepts: catalog PHP declarations with docblock metadata."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode


def main():
    cli()
