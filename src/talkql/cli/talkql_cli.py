"""Main CLI loop for an interactive query session."""

import logging
import sys
from typing import TextIO

import httpx

from talkql.configs.config import AppConfig
from talkql.core.session import (
    TURN_STATUS_BUSY,
    QueryServiceClient,
    QuerySessionController,
    RecordingNavigator,
    SessionStartParams,
)
from talkql.infra.logging import setup_logging

from .renderer import TranscriptRenderer

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit", "q")
_ON_VALUES = ("on", "true", "1", "yes")
_OFF_VALUES = ("off", "false", "0", "no")


class TalkQLCLI:
    """Interactive terminal host for a query session."""

    def __init__(
        self,
        config: AppConfig,
        start_params: SessionStartParams | None = None,
        input_stream: TextIO = sys.stdin,
        output_stream: TextIO = sys.stdout,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the CLI.

        Parameters
        ----------
        config
            Application configuration.
        start_params
            Hand-off connection parameters, if any.
        input_stream
            Input stream for user input (default: stdin).
        output_stream
            Output stream for the transcript (default: stdout).
        transport
            Optional httpx transport override for the service client.
        """
        self.config = config
        self.input_stream = input_stream
        self.renderer = TranscriptRenderer(output_stream)
        self.navigator = RecordingNavigator()
        self.client = QueryServiceClient(config.service, transport=transport)
        self.controller = QuerySessionController(
            self.client, self.navigator, config, start_params=start_params
        )

    async def run(self) -> None:
        """Resolve the connection, then run the interactive loop."""
        try:
            connection = await self.controller.resolve_connection()
            if connection is None:
                self.renderer.render_notice(
                    "No database connected. Connect a data source and try again."
                )
                return

            self._print_welcome()
            while not self.navigator.left:
                try:
                    line = self._get_user_input()
                    if not line.strip():
                        continue

                    if line.strip().lower() in EXIT_COMMANDS:
                        self.renderer.render_notice("Goodbye!")
                        break

                    if line.startswith("/"):
                        await self._handle_command(line)
                    else:
                        await self._process_query(line)

                except KeyboardInterrupt:
                    self.renderer.render_notice(
                        "\nInterrupted. Use 'exit' or 'quit' to exit."
                    )
                except EOFError:
                    self.renderer.render_notice("\nGoodbye!")
                    break
        finally:
            await self.client.close()

    async def _process_query(self, query: str) -> None:
        """Run one turn and print what it appended."""
        outcome = await self.controller.send_message(query)
        if outcome.status == TURN_STATUS_BUSY:
            self.renderer.render_notice("A query is still running, please wait.")
            return
        self.renderer.render_new(self.controller.transcript)
        self.renderer.render_notice("")

    async def _handle_command(self, line: str) -> None:
        parts = line[1:].split()
        command = parts[0].lower() if parts else ""
        argument = parts[1].lower() if len(parts) > 1 else None
        state = self.controller.state

        if command in ("viz", "tabular"):
            current = (
                state.visualization_enabled
                if command == "viz"
                else state.tabular_mode_enabled
            )
            enabled = self._parse_toggle(argument, current)
            if enabled is None:
                self.renderer.render_notice(f"Usage: /{command} on|off")
                return
            if command == "viz":
                self.controller.set_visualization(enabled)
            else:
                self.controller.set_tabular_mode(enabled)
            self.renderer.render_modes(
                state.visualization_enabled, state.tabular_mode_enabled
            )

        elif command == "status":
            if state.connection is not None:
                self.renderer.render_header(state.connection)
            self.renderer.render_modes(
                state.visualization_enabled, state.tabular_mode_enabled
            )

        elif command == "disconnect":
            outcome = await self.controller.disconnect()
            if outcome.ok:
                self.renderer.render_notice("Disconnected.")
            else:
                logger.debug(f"Disconnect failed: {outcome.error}")

        else:
            self.renderer.render_notice(
                "Commands: /viz on|off, /tabular on|off, /status, /disconnect"
            )

    @staticmethod
    def _parse_toggle(argument: str | None, current: bool) -> bool | None:
        if argument is None:
            return not current
        if argument in _ON_VALUES:
            return True
        if argument in _OFF_VALUES:
            return False
        return None

    def _get_user_input(self) -> str:
        """Get user input from the input stream."""
        self.renderer.render_prompt()
        line = self.input_stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n\r")

    def _print_welcome(self) -> None:
        state = self.controller.state
        self.renderer.render_notice("TalkQL - Conversational insights for your database")
        self.renderer.render_header(state.connection)
        self.renderer.render_modes(
            state.visualization_enabled, state.tabular_mode_enabled
        )
        if not state.has_shown_welcome:
            self.renderer.render_notice(self.config.session.welcome_prompt)
        self.renderer.render_notice(
            "Type your question and press Enter. Type 'exit' or 'quit' to exit.\n"
        )


async def main(
    base_url: str | None = None,
    db_type: str | None = None,
    db_name: str | None = None,
    visualization: bool = False,
    tabular: bool = False,
    debug: bool = False,
) -> None:
    """Main entry point for the CLI.

    Parameters
    ----------
    base_url
        Query service base URL; overrides the configured one.
    db_type, db_name
        Hand-off connection; both must be given to skip the status check.
    visualization, tabular
        Initial display toggles.
    debug
        Enable debug logging.
    """
    config = AppConfig()
    if base_url:
        config.service.base_url = base_url
    if debug:
        config.logging.level = "DEBUG"
    setup_logging(config.logging)

    cli = TalkQLCLI(
        config,
        start_params=SessionStartParams(db_type=db_type, db_name=db_name),
    )
    cli.controller.set_visualization(visualization)
    cli.controller.set_tabular_mode(tabular)
    await cli.run()
