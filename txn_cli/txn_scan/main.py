"""txn-scan CLI entrypoint."""

from __future__ import annotations

import functools
from collections.abc import Sequence
from pathlib import Path

import click

from txn_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors
from txn_cli.shared.config import EXPORT_FORMATS

from .channel import RequestChannel, ScanRequest, handle_scan_request
from .render import default_export_name, render_json, render_table, write_csv
from .samples import sample_transactions
from .sites import build_site_rules, detect_site
from .types import ScanSummary, Transaction


class ScanDefaultGroup(click.Group):
    """Click group that falls back to a default command when none is provided."""

    def __init__(self, *args, default_command: str | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._default_command = default_command

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if self._default_command is None:
            return super().resolve_command(ctx, args)

        if not args:
            return super().resolve_command(ctx, [self._default_command])

        cmd = super().get_command(ctx, args[0])
        if cmd is not None:
            return super().resolve_command(ctx, args)

        return super().resolve_command(ctx, [self._default_command] + args)


_format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(EXPORT_FORMATS, case_sensitive=False),
    help="Output format (default: from config, normally csv).",
)


@click.group(
    help="Find transaction tables in saved bank pages and export them.",
    invoke_without_command=True,
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    cls=ScanDefaultGroup,
    default_command="extract",
)
def main() -> None:
    return


@main.command("extract")
@click.argument("page", type=click.Path(path_type=str))
@click.option("--url", help="Address the page was saved from; selects the source label.")
@click.option("--source", "source_label", help="Override the detected source label.")
@_format_option
@click.option("--output", "output_path", type=click.Path(path_type=str), help="Write output to file.")
@click.option("--stdout", is_flag=True, help="Write output to stdout.")
@click.option(
    "--no-fallback",
    is_flag=True,
    help="Fail instead of returning sample data when no ledger table is found.",
)
@common_cli_options
@handle_cli_errors
def extract_command(
    page: str,
    url: str | None,
    source_label: str | None,
    output_format: str | None,
    output_path: str | None,
    stdout: bool,
    no_fallback: bool,
    cli_ctx: CLIContext,
) -> None:
    """Scan PAGE (a saved HTML file) for transaction tables."""

    if output_path and stdout:
        raise click.UsageError("Cannot use both --output and --stdout simultaneously.")

    config = cli_ctx.config
    use_fallback = config.scan.use_fallback and not no_fallback
    responder = functools.partial(
        handle_scan_request,
        site_rules=build_site_rules(config.sites),
        default_source=config.scan.default_source,
        use_fallback=use_fallback,
    )
    channel = RequestChannel(responder, timeout=config.scan.timeout_seconds)
    response = channel.send(ScanRequest(path=Path(page), url=url, source=source_label))
    if not response.success:
        raise click.ClickException(response.error or "Scan failed.")

    transactions = list(response.transactions or ())
    if not transactions:
        raise click.ClickException("No transaction table was found on the page.")

    summary = response.summary or ScanSummary()
    cli_ctx.logger.info(f"Source: {response.source} | Transactions: {len(transactions)}")
    if summary.used_fallback:
        cli_ctx.logger.warning("No transaction table found; returning sample data.")

    if cli_ctx.dry_run:
        _emit_dry_run_summary(cli_ctx, response.source or "", summary, transactions)
        return

    fmt = (output_format or config.export.format).lower()
    if fmt == "csv" and not output_path and not stdout:
        auto_output_path = config.export.output_dir / default_export_name()
        output_path = str(auto_output_path)
        cli_ctx.logger.info(
            f"No --output provided; defaulting to {auto_output_path} in the output directory."
        )

    _emit(transactions, fmt, output_path)
    if output_path:
        cli_ctx.logger.success(f"Extraction complete. Output written to {output_path}.")


@main.command("detect-site")
@click.argument("url")
@common_cli_options
@handle_cli_errors
def detect_site_command(url: str, cli_ctx: CLIContext) -> None:
    """Print the source label chosen for URL."""

    rules = build_site_rules(cli_ctx.config.sites)
    click.echo(detect_site(url, rules, default=cli_ctx.config.scan.default_source))


@main.command("sample")
@click.argument("source", required=False)
@_format_option
@click.option("--output", "output_path", type=click.Path(path_type=str), help="Write output to file.")
@common_cli_options
@handle_cli_errors
def sample_command(
    source: str | None,
    output_format: str | None,
    output_path: str | None,
    cli_ctx: CLIContext,
) -> None:
    """Render the built-in demo ledger, tagged with SOURCE."""

    transactions = sample_transactions(source or cli_ctx.config.scan.default_source)
    fmt = (output_format or cli_ctx.config.export.format).lower()
    _emit(transactions, fmt, output_path)


def _emit(transactions: Sequence[Transaction], fmt: str, output_path: str | None) -> None:
    if fmt == "table":
        render_table(transactions)
    elif fmt == "json":
        text = render_json(transactions)
        if output_path:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(text + "\n", encoding="utf-8")
        else:
            click.echo(text)
    else:
        write_csv(transactions, output_path)


def _emit_dry_run_summary(
    cli_ctx: CLIContext,
    source: str,
    summary: ScanSummary,
    transactions: Sequence[Transaction],
) -> None:
    cli_ctx.logger.info("Dry run summary:")
    cli_ctx.logger.info(f"  Source: {source}")
    cli_ctx.logger.info(
        f"  Tables: {summary.tables_seen} seen, {summary.tables_qualified} qualified"
    )
    cli_ctx.logger.info(
        f"  Rows: {summary.rows_extracted} extracted, {summary.rows_rejected} rejected"
    )
    cli_ctx.logger.info(f"  Transactions: {len(transactions)}")
    if summary.used_fallback:
        cli_ctx.logger.info("  Fallback: sample data")


if __name__ == "__main__":  # pragma: no cover
    main()
