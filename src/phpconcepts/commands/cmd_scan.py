"""Scan a PHP project: discover files and summarize their concepts."""

from collections import Counter
from pathlib import Path

import click

from phpconcepts.config import find_config_root, load_config
from phpconcepts.exit_codes import PartialResultError
from phpconcepts.index.composer import extract_composer_insights, load_composer_json
from phpconcepts.index.discovery import discover_files
from phpconcepts.index.extraction import extract_files
from phpconcepts.output.formatter import abbrev_kind, concept_line, json_envelope, section, to_json


@click.command("scan")
@click.argument('path', default='.', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option('--list', 'list_all', is_flag=True, help='List every concept, not just counts')
@click.pass_context
def scan(ctx, path, list_all):
    """Discover PHP files under PATH and catalog their concepts."""
    json_mode = ctx.obj.get('json')

    config_root = find_config_root(path)
    config = load_config(config_root) if config_root else load_config(path)
    files = discover_files(path, config)
    results = extract_files(files, path)
    composer = extract_composer_insights(load_composer_json(path), path.resolve())

    kind_counts = Counter(c.concept_type for r in results for c in r.concepts)
    total = sum(kind_counts.values())
    failures = sum(len(r.errors) for r in results)

    if json_mode:
        payload = {
            "kinds": dict(sorted(kind_counts.items())),
            "composer": composer.to_dict(),
            "files": [
                {
                    "path": r.file_path,
                    "concept_count": len(r.concepts),
                    "errors": r.errors,
                }
                for r in results
            ],
        }
        if list_all:
            payload["concepts"] = [c.to_dict() for r in results for c in r.concepts]
        click.echo(to_json(json_envelope("scan",
            summary={
                "verdict": f"{total} concepts in {len(results)} PHP file(s)",
                "files": len(results),
                "concepts": total,
                "errors": failures,
                "namespaces": len(composer.namespaces),
                "frameworks": composer.framework_hints,
            },
            **payload,
        )))
    else:
        click.echo(f"{total} concepts in {len(results)} PHP file(s)")
        if kind_counts:
            click.echo("  " + ", ".join(
                f"{abbrev_kind(k)}:{n}" for k, n in sorted(kind_counts.items())
            ))
        if composer.framework_hints:
            click.echo(f"  frameworks: {', '.join(composer.framework_hints)}")
        for ns, ns_paths in composer.namespaces.items():
            click.echo(f"  autoload {ns} -> {', '.join(ns_paths)}")
        for r in results:
            lines = []
            if list_all:
                lines = [f"  {concept_line(c)}" for c in r.concepts]
            lines.extend(f"  ! {err}" for err in r.errors)
            click.echo(section(f"{r.file_path} ({len(r.concepts)})", lines))

    if failures:
        raise PartialResultError(failures)
