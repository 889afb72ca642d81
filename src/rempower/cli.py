"""Console entrypoints for the rempower toolkit."""

import typer
from rich.console import Console

from rempower import __version__
from rempower.dns.errors import DnsError
from rempower.dns.listing import list_dns
from rempower.dns.logging_utils import DEFAULT_LOGGER, LoggingManager
from rempower.dns.policies import enable_dhcp_dns, enable_pub_dns
from rempower.dns.probes import DEFAULT_READER, ResolverReader
from rempower.dns.status import print_listing, print_report
from rempower.dns.types import ResolverMode
from rempower.dns.writer import DEFAULT_WRITER, ResolverWriter

APPLY_BY_MODE = {
    ResolverMode.PUBLIC: enable_pub_dns,
    ResolverMode.DHCP: enable_dhcp_dns,
}


class RemCLI:
    """Object-oriented wrapper for the Typer command-line interface."""

    def __init__(
        self,
        *,
        reader: ResolverReader = DEFAULT_READER,
        writer: ResolverWriter = DEFAULT_WRITER,
        logger: LoggingManager = DEFAULT_LOGGER,
        console: Console | None = None,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.logger = logger
        self.console = console
        self.app = typer.Typer(
            help=(
                f"Python empowered tools v{__version__}\n\n"
                "Shell completion: run 'rem --install-completion' to install it, "
                "or 'rem --show-completion' to print the script."
            ),
        )
        self.app.callback(invoke_without_command=True)(self._main)
        self.app.command("dns")(self._dns)

    def _main(
        self,
        ctx: typer.Context,
        version: bool = typer.Option(
            False,
            "--version",
            help="Show the version and exit.",
        ),
    ) -> None:
        if version:
            typer.echo(f"rempower {__version__}")
            raise typer.Exit(code=0)
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit(code=0)

    def _dns(
        self,
        public: bool = typer.Option(
            False,
            "--pub",
            help="Enable CloudFlare and Google DNS servers.",
        ),
        dhcp: bool = typer.Option(
            False,
            "--dhcp",
            help="Revert to DNS servers assigned by the DHCP server.",
        ),
        list_only: bool = typer.Option(
            False,
            "--list",
            "-l",
            help="List active DNS servers.",
        ),
        dry_run: bool = typer.Option(
            False,
            "--dry-run",
            help="Log actions but do not make changes.",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Enable verbose debug logging.",
        ),
    ) -> None:
        """Switch between public DNS servers and those assigned by the DHCP server."""
        if [public, dhcp, list_only].count(True) != 1:
            raise typer.BadParameter("choose exactly one of --pub, --dhcp or --list.")
        if list_only and dry_run:
            raise typer.BadParameter("--dry-run only applies to --pub and --dhcp.")

        self.logger.setup(verbose)
        if list_only:
            raise typer.Exit(code=self._list())

        mode = ResolverMode.PUBLIC if public else ResolverMode.DHCP
        raise typer.Exit(code=self._apply(mode, dry_run))

    def _list(self) -> int:
        try:
            entries = list_dns(reader=self.reader, logger=self.logger)
        except DnsError as exc:
            typer.echo(f"Error: {exc}", err=True)
            return 1

        print_listing(entries, console=self.console)
        return 1 if any(entry.error for entry in entries) else 0

    def _apply(self, mode: ResolverMode, dry_run: bool) -> int:
        try:
            report = APPLY_BY_MODE[mode](
                reader=self.reader,
                writer=self.writer,
                dry_run=dry_run,
                logger=self.logger,
            )
        except DnsError as exc:
            typer.echo(f"Error: {exc}", err=True)
            return 1

        print_report(report, console=self.console)
        return 0 if report.success else 1

    def run(self) -> None:
        """Invoke the Typer application."""
        self.app(prog_name="rem")


cli = RemCLI()
app = cli.app


if __name__ == "__main__":
    cli.run()
