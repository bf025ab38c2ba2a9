"""chart-agent CLI: an interactive chat that draws bar and line charts in the terminal."""

from pathlib import Path
from typing import List, Optional
import asyncio
import logging

import click

from .agent import AgentResponse, ChartAgent, ConversationMessage, OpenAIChatModel, create_chart_agent
from .agent.prompts import EXCEL_FILE_REQUEST
from .charts import ChartOrchestrator, ChartSpecification, ChartType
from .config import get_config, setup_logging
from .exceptions import ParseError
from .parsers import ExcelParser, is_valid_excel_file

logger = logging.getLogger(__name__)

BANNER = """
╔════════════════════════════════════════════════════════╗
║        Welkom bij Chart Agent!                         ║
╚════════════════════════════════════════════════════════╝
"""

EXIT_COMMAND = "/exit"
MAX_BAR_WIDTH = 50
LABEL_WIDTH = 15
LINE_HEIGHT = 10
MAX_LINE_WIDTH = 60


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def render_bar_chart(spec: ChartSpecification) -> List[str]:
    """One row per label: padded label, a bar of █ scaled to the largest value, the value."""
    max_value = max(spec.values)
    lines = []
    for label, value in zip(spec.labels, spec.values):
        width = round(value / max_value * MAX_BAR_WIDTH) if max_value > 0 else 0
        bar = "█" * max(width, 0)
        display = f"{_format_value(value)} {spec.unit}" if spec.unit else _format_value(value)
        lines.append(f"{label.ljust(LABEL_WIDTH)} {bar} {display}")
    return lines


def render_line_chart(spec: ChartSpecification) -> List[str]:
    """A 10-row grid with ● at each point and ─ between neighbouring points."""
    values = spec.values
    max_value = max(values)
    width = min(len(values) * 3, MAX_LINE_WIDTH)
    grid = [[" "] * width for _ in range(LINE_HEIGHT)]

    def to_x(i: int) -> int:
        if len(values) == 1:
            return 0
        return round(i / (len(values) - 1) * (width - 1))

    def to_y(value: float) -> int:
        level = round(value / max_value * (LINE_HEIGHT - 1)) if max_value > 0 else 0
        return LINE_HEIGHT - 1 - min(max(level, 0), LINE_HEIGHT - 1)

    points = [(to_x(i), to_y(v)) for i, v in enumerate(values)]
    for (x, y), (next_x, next_y) in zip(points, points[1:]):
        steps = next_x - x
        for step in range(steps + 1):
            ix = x + round((next_x - x) * step / steps) if steps else x
            iy = y + round((next_y - y) * step / steps) if steps else y
            if grid[iy][ix] == " ":
                grid[iy][ix] = "─"
    for x, y in points:
        grid[y][x] = "●"

    lines = []
    for row_index, row in enumerate(grid):
        axis_value = round((1 - row_index / (LINE_HEIGHT - 1)) * max_value)
        lines.append(f"{str(axis_value).rjust(6)} │ {''.join(row)}")
    lines.append(f"{'':6} └{'─' * width}")

    step = max(1, len(spec.labels) // 5)
    column = max(width // 5, 1)
    x_labels = "".join(label[:8].ljust(column) for label in spec.labels[::step])
    lines.append(("       " + x_labels)[:width + 8])

    if spec.unit:
        lines.append("")
        lines.append(f"({spec.unit})")
    return lines


def render_chart_in_terminal(spec: ChartSpecification) -> str:
    """Text preview of a chart, titled and underlined."""
    lines = ["", spec.title, "─" * len(spec.title), ""]
    if spec.chart_type == ChartType.BAR:
        lines.extend(render_bar_chart(spec))
    else:
        lines.extend(render_line_chart(spec))
    lines.append("")
    return "\n".join(lines)


class ChartCLI:
    """Interactive loop that owns the conversation history."""

    def __init__(self, agent: ChartAgent, excel_parser: Optional[ExcelParser] = None, save: bool = False):
        self.agent = agent
        self.excel_parser = excel_parser or ExcelParser()
        self.save = save
        self.conversation_history: List[ConversationMessage] = []

    async def handle_command(self, command: str) -> bool:
        """Process one line of input. Returns False when the user wants to quit."""
        command = command.strip()
        if command == EXIT_COMMAND:
            return False
        if not command:
            return True

        excel_data = None
        if is_valid_excel_file(command):
            path = Path(command).expanduser()
            if not path.exists():
                click.echo(f"❌ Fout: Bestand niet gevonden: {command}\n")
                return True
            click.echo("📊 Excel-bestand gevonden, aan het verwerken...\n")
            try:
                excel_data = self.excel_parser.parse_excel_file(path).to_prompt_fragment()
            except ParseError as e:
                click.echo(f"❌ Fout: {e}\n")
                return True
            command = EXCEL_FILE_REQUEST

        click.echo("🤖 Aan het verwerken...\n")
        response = await self.agent.process_request(
            command,
            self.conversation_history,
            excel_data=excel_data,
            save_to_disk=self.save,
        )

        self.conversation_history.append(ConversationMessage(role="user", content=command))
        self.conversation_history.append(ConversationMessage(role="assistant", content=response.message))

        self.print_response(response)
        return True

    def print_response(self, response: AgentResponse) -> None:
        click.echo(f"💬 {response.message}\n")

        if response.chart_data:
            click.echo("📊 Grafiek in terminal:")
            click.echo(render_chart_in_terminal(response.chart_data))

        if response.chart_path:
            click.echo(f"📁 Grafiek opgeslagen in: {response.chart_path}\n")

        if not response.success and response.error:
            click.echo(f"⚠️  Details: {response.error}\n")

    async def run(self) -> None:
        click.echo(BANNER)
        click.echo("Ik kan staaf- en lijngrafieken maken in FD- of BNR-kleuren.")
        click.echo("Je kunt ook een Excel-bestand opgeven door het pad in te voeren.")
        click.echo(f'Typ "{EXIT_COMMAND}" om af te sluiten.\n')

        while True:
            try:
                command = await asyncio.to_thread(
                    click.prompt, "chart-agent", default="", show_default=False, prompt_suffix="> "
                )
            except (EOFError, click.Abort):
                break
            if not await self.handle_command(command):
                break

        click.echo("\nTot ziens!")


@click.command()
@click.option(
    "--save/--no-save",
    default=False,
    help="Write rendered charts to the output directory (default: off).",
)
@click.option(
    "-o", "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for saved charts (default: CHART_OUTPUT_DIR).",
)
@click.option(
    "--model",
    default=None,
    help="OpenAI model name (default: OPENAI_MODEL).",
)
def main(save: bool, output_dir: Optional[str], model: Optional[str]):
    """Chat with the chart agent in the terminal."""
    app_config = get_config()
    setup_logging("WARNING" if not app_config.DEBUG_MODE else "DEBUG")

    if not app_config.OPENAI_API_KEY:
        click.echo("❌ Fout: OPENAI_API_KEY omgevingsvariabele is niet ingesteld", err=True)
        click.echo("Stel deze in via: export OPENAI_API_KEY=your-api-key", err=True)
        raise SystemExit(1)

    orchestrator = ChartOrchestrator(
        output_dir=output_dir or app_config.CHART_OUTPUT_DIR,
        save_charts=save,
    )
    agent = create_chart_agent(model=OpenAIChatModel(model_name=model), chart_orchestrator=orchestrator)
    asyncio.run(ChartCLI(agent, save=save).run())


if __name__ == "__main__":
    main()
