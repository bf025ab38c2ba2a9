import pytest
from click.testing import CliRunner

from chart_agent.agent.prompts import EXCEL_FILE_REQUEST
from chart_agent.charts import validate_chart_specification
from chart_agent.cli import ChartCLI, main, render_bar_chart, render_chart_in_terminal, render_line_chart
from conftest import build_workbook, text_reply, tool_call_reply


def spec_for(chart_type, labels, values, unit=None):
    return validate_chart_specification({
        "labels": labels,
        "values": values,
        "title": "Omzet",
        "unit": unit,
        "chartType": chart_type,
        "colorScheme": "fd",
    })


def test_bar_chart_rows_scale_to_largest_value():
    lines = render_bar_chart(spec_for("bar", ["Q1", "Q2"], [100, 50], unit="EUR"))

    assert lines[0] == "Q1".ljust(15) + " " + "█" * 50 + " 100 EUR"
    assert lines[1] == "Q2".ljust(15) + " " + "█" * 25 + " 50 EUR"


def test_bar_chart_keeps_decimals():
    lines = render_bar_chart(spec_for("bar", ["Ma"], [4.1]))
    assert lines[0].endswith(" 4.1")


def test_line_chart_grid():
    lines = render_line_chart(spec_for("line", ["Jan", "Feb", "Mrt"], [5, 10, 0]))

    grid = lines[:10]
    assert all("│" in row for row in grid)
    assert grid[0].strip().startswith("10")
    assert sum(row.count("●") for row in grid) == 3
    assert lines[10].strip().startswith("└")
    assert "Jan" in lines[11]


def test_line_chart_single_point():
    lines = render_line_chart(spec_for("line", ["Jan"], [3]))
    assert sum(row.count("●") for row in lines[:10]) == 1


def test_terminal_preview_has_underlined_title():
    output = render_chart_in_terminal(spec_for("bar", ["Q1"], [1]))
    assert "\nOmzet\n─────\n" in output


@pytest.mark.asyncio
async def test_handle_command_threads_history(make_agent, bar_chart_args, capsys):
    agent, model = make_agent([
        tool_call_reply("create_bar_chart", bar_chart_args),
        text_reply("Staafgrafiek gemaakt."),
        text_reply("Graag gedaan."),
    ])
    cli = ChartCLI(agent)

    assert await cli.handle_command("Staafgrafiek Q1=100, Q2=150") is True
    assert await cli.handle_command("Bedankt") is True

    assert [m.role for m in cli.conversation_history] == ["user", "assistant", "user", "assistant"]
    assert len(model.calls[2]["messages"]) == 3
    output = capsys.readouterr().out
    assert "💬 Staafgrafiek gemaakt." in output
    assert "█" in output


@pytest.mark.asyncio
async def test_exit_command(make_agent):
    agent, model = make_agent([])
    assert await ChartCLI(agent).handle_command("/exit") is False
    assert model.calls == []


@pytest.mark.asyncio
async def test_excel_path_is_parsed_and_sent(make_agent, tmp_path):
    path = tmp_path / "omzet.xlsx"
    path.write_bytes(build_workbook([["Kwartaal", "Omzet"], ["Q1", 100]], sheet_title="Omzet"))
    agent, model = make_agent([text_reply("Welk type grafiek?")])

    await ChartCLI(agent).handle_command(str(path))

    sent = model.calls[0]["messages"][-1].content
    assert EXCEL_FILE_REQUEST in sent
    assert "<excel_data>" in sent and '"Q1"' in sent


@pytest.mark.asyncio
async def test_missing_excel_file(make_agent, tmp_path, capsys):
    agent, model = make_agent([])

    await ChartCLI(agent).handle_command(str(tmp_path / "bestaat-niet.xlsx"))

    assert model.calls == []
    assert "Bestand niet gevonden" in capsys.readouterr().out


def test_main_requires_api_key(monkeypatch):
    from chart_agent.config import config

    monkeypatch.setattr(config, "OPENAI_API_KEY", None)
    result = CliRunner().invoke(main, [])

    assert result.exit_code == 1
    assert "OPENAI_API_KEY" in result.output
