from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="matchtree", help="Run declarative matcher checks")

_EXAMPLE_CHECKS = """\
checks:
  - name: greeting-is-polite
    value: "Hello, World!"
    expect:
      all_of:
        - {has_prefix: "Hello"}
        - {contains: "World"}
    comments:
      - "greetings should start with Hello"

  - name: answer-in-range
    value: 42
    mode: assert
    expect:
      both:
        - {greater_than: 0}
        - {less_than: 100}

  - name: user-home-is-set
    value: "${HOME:-}"
    expect: {not: empty}
"""


@app.command()
def run(
    config: str = typer.Argument(help="Path to checks YAML config"),
    check: str | None = typer.Option(None, help="Run only this check"),
    junit: str | None = typer.Option(None, help="Write a JUnit XML report here"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Write debug output to this file"
    ),
):
    """Run every check in a checks file and print failure explanations."""
    from matchtree.config import load_config
    from matchtree.runner import CheckRunner

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        check_file = load_config(config_path)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger = None
    if verbose or debug_log:
        from matchtree.verbose import setup_logger, teardown_logger

        log_path = Path(debug_log) if debug_log else Path(".matchtree") / "debug.log"
        logger = setup_logger(log_path, verbose=verbose, logger_name="matchtree_run")

    try:
        outcomes = CheckRunner(check_file, logger=logger, check_filter=check).execute()
    finally:
        if logger is not None:
            teardown_logger(logger)

    if check and not outcomes:
        typer.echo(f"Error: no check named '{check}'", err=True)
        raise typer.Exit(1)

    for outcome in outcomes:
        if outcome.skipped:
            typer.echo(f"SKIP {outcome.name}")
            continue
        typer.echo(f"{'PASS' if outcome.passed else 'FAIL'} {outcome.name}")
        if outcome.output:
            typer.echo(outcome.output.rstrip("\n"))

    passed = sum(1 for o in outcomes if o.passed)
    typer.echo(f"{passed}/{len(outcomes)} check(s) passed")

    if junit:
        from matchtree.reporting.junit import write_junit

        junit_path = write_junit(Path(junit), outcomes)
        typer.echo(f"JUnit report: {junit_path}")

    if passed != len(outcomes):
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to write checks.yaml into"),
):
    """Write an example checks file."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "checks.yaml"
    if example.exists():
        typer.echo(f"checks.yaml already exists in {dir}, skipping.")
        return

    example.write_text(_EXAMPLE_CHECKS)
    typer.echo(f"Wrote example checks: {example}")


@app.command()
def schema(
    out: str = typer.Option(
        "schemas/matchtree.schema.json", help="Output path for JSON Schema"
    ),
    doc: str | None = typer.Option(None, help="Also write Markdown docs here"),
):
    """Generate JSON Schema (and optionally docs) for the checks YAML format."""
    from matchtree.schema import write_json_schema, write_schema_doc

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Wrote schema: {out_path}")
    if doc is not None:
        doc_path = Path(doc)
        write_schema_doc(doc_path)
        typer.echo(f"Wrote docs: {doc_path}")
