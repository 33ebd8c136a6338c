"""Extract concepts from individual PHP files."""

from pathlib import Path

import click

from phpconcepts.exit_codes import PartialResultError
from phpconcepts.index.extraction import extract_file
from phpconcepts.models import CONCEPT_TYPES
from phpconcepts.output.formatter import concept_line, json_envelope, to_json


@click.command("extract")
@click.argument('paths', nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--kind', 'kinds', multiple=True, type=click.Choice(sorted(CONCEPT_TYPES)),
              help='Only show concepts of this type (repeatable)')
@click.pass_context
def extract(ctx, paths, kinds):
    """List the concepts declared in each PHP file."""
    json_mode = ctx.obj.get('json')

    results = [extract_file(p) for p in paths]
    if kinds:
        for r in results:
            r.concepts = [c for c in r.concepts if c.concept_type in kinds]
    failures = sum(len(r.errors) for r in results)

    if json_mode:
        click.echo(to_json(json_envelope("extract",
            summary={
                "verdict": f"{sum(len(r.concepts) for r in results)} concepts in {len(results)} file(s)",
                "files": len(results),
                "concepts": sum(len(r.concepts) for r in results),
                "errors": failures,
            },
            files=[
                {
                    "path": r.file_path,
                    "concepts": [c.to_dict() for c in r.concepts],
                    "errors": r.errors,
                }
                for r in results
            ],
        )))
    else:
        first = True
        for r in results:
            if not first:
                click.echo()
            click.echo(f"=== {r.file_path} ({len(r.concepts)} concepts) ===")
            for c in r.concepts:
                click.echo(f"  {concept_line(c)}")
                description = c.metadata.get("docblock.description")
                if description:
                    click.echo(f"      {description}")
            for err in r.errors:
                click.echo(f"  ! {err}")
            first = False

    if failures:
        raise PartialResultError(failures)
