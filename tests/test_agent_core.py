import threading

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from chart_agent.agent import GENERIC_FAILURE_MESSAGE, SYSTEM_PROMPT, ConversationMessage, to_langchain_messages
from chart_agent.agent.agent_core import STEP_LIMIT_MESSAGE
from chart_agent.exceptions import TransportError
from conftest import text_reply, tool_call_reply


@pytest.mark.asyncio
async def test_bar_chart_request(make_agent, bar_chart_args):
    agent, model = make_agent([
        tool_call_reply("create_bar_chart", bar_chart_args),
        text_reply("Ik heb een staafgrafiek gemaakt."),
    ])

    response = await agent.process_request("Maak een staafgrafiek: Q1=100, Q2=150")

    assert response.success is True
    assert response.message == "Ik heb een staafgrafiek gemaakt."
    assert response.chart_data.labels == ("Q1", "Q2")
    assert response.chart_data.values == (100.0, 150.0)
    assert response.chart_path.endswith(".svg")
    assert len(model.calls) == 2
    assert model.calls[0]["system_prompt"] == SYSTEM_PROMPT
    assert model.calls[0]["tools"] == ["create_bar_chart", "create_line_chart"]

    # second call sees the tool outcome
    second_messages = model.calls[1]["messages"]
    assert isinstance(second_messages[-1], ToolMessage)
    assert second_messages[-1].tool_call_id == "call_1"


@pytest.mark.asyncio
async def test_user_input_is_wrapped(make_agent):
    agent, model = make_agent([text_reply("Welke data wil je gebruiken?")])

    await agent.process_request("Maak een grafiek", excel_data='{"labels": ["Jan"]}')

    last = model.calls[0]["messages"][-1]
    assert isinstance(last, HumanMessage)
    assert "<user_request>Maak een grafiek</user_request>" in last.content
    assert '<excel_data>\n{"labels": ["Jan"]}\n</excel_data>' in last.content


@pytest.mark.asyncio
async def test_refusal_is_not_an_error(make_agent):
    agent, _ = make_agent([
        text_reply("Sorry, ik kan alleen staaf- en lijngrafieken maken in FD- of BNR-kleuren."),
    ])

    response = await agent.process_request("Wat is het weer vandaag?")

    assert response.success is True
    assert response.chart_data is None
    assert response.chart_path is None
    assert "staaf- en lijngrafieken" in response.message


@pytest.mark.asyncio
async def test_history_is_passed_in_order(make_agent):
    agent, model = make_agent([text_reply("Oké, BNR-kleuren.")])
    history = [
        {"role": "user", "content": "Gebruik BNR-kleuren"},
        ConversationMessage(role="assistant", content="Prima"),
    ]

    await agent.process_request("Maak een lijngrafiek", history)

    messages = model.calls[0]["messages"]
    assert isinstance(messages[0], HumanMessage) and messages[0].content == "Gebruik BNR-kleuren"
    assert isinstance(messages[1], AIMessage) and messages[1].content == "Prima"
    assert len(messages) == 3


@pytest.mark.asyncio
async def test_tool_error_is_narrated(make_agent):
    agent, model = make_agent([
        tool_call_reply("create_bar_chart", {"labels": ["A", "B"], "values": [1], "title": "T", "colorScheme": "fd"}),
        text_reply("Het aantal labels komt niet overeen met het aantal waarden."),
    ])

    response = await agent.process_request("Maak een grafiek met A=1, B")

    assert response.success is True
    assert response.chart_data is None
    tool_message = model.calls[1]["messages"][-1]
    assert '"success": false' in tool_message.content
    assert "komt niet overeen" in tool_message.content


@pytest.mark.asyncio
async def test_transport_error_fails_request(make_agent):
    agent, _ = make_agent([TransportError("connection refused")])

    response = await agent.process_request("Maak een staafgrafiek: Q1=100")

    assert response.success is False
    assert response.message == GENERIC_FAILURE_MESSAGE
    assert "connection refused" in response.error
    assert response.chart_data is None


@pytest.mark.asyncio
async def test_unknown_tool_fails_request(make_agent, chart_output_dir):
    agent, _ = make_agent([tool_call_reply("create_pie_chart", {"labels": ["A"], "values": [1]})])

    response = await agent.process_request("Maak een taartdiagram")

    assert response.success is False
    assert "create_pie_chart" in response.error
    assert not chart_output_dir.exists()


@pytest.mark.asyncio
async def test_step_cap(make_agent, bar_chart_args):
    replies = [tool_call_reply("create_bar_chart", bar_chart_args, call_id=f"call_{i}") for i in range(3)]
    agent, model = make_agent(replies, max_steps=3)

    response = await agent.process_request("Blijf grafieken maken")

    assert len(model.calls) == 3
    assert response.success is True
    assert response.message == STEP_LIMIT_MESSAGE
    assert response.chart_data is not None


@pytest.mark.asyncio
async def test_latest_successful_chart_wins(make_agent, bar_chart_args):
    agent, _ = make_agent([
        AIMessage(content="", tool_calls=[
            {"name": "create_bar_chart", "args": bar_chart_args, "id": "a"},
            {"name": "create_line_chart", "args": {**bar_chart_args, "colorScheme": "bnr"}, "id": "b"},
            {"name": "create_bar_chart", "args": {**bar_chart_args, "values": []}, "id": "c"},
        ]),
        text_reply("Klaar."),
    ])

    response = await agent.process_request("Maak twee grafieken")

    assert response.chart_data.chart_type.value == "line"
    assert response.chart_data.color_scheme.value == "bnr"


@pytest.mark.asyncio
async def test_save_to_disk_false(make_agent, bar_chart_args, chart_output_dir):
    agent, _ = make_agent([tool_call_reply("create_bar_chart", bar_chart_args), text_reply("Klaar.")])

    response = await agent.process_request("Staafgrafiek", save_to_disk=False)

    assert response.chart_data is not None
    assert response.chart_path is None
    assert not chart_output_dir.exists()


@pytest.mark.asyncio
async def test_response_serializes_with_wire_names(make_agent, bar_chart_args):
    agent, _ = make_agent([tool_call_reply("create_bar_chart", bar_chart_args), text_reply("Klaar.")])

    response = await agent.process_request("Staafgrafiek")
    data = response.model_dump(by_alias=True, exclude_none=True, mode="json")

    assert set(data) == {"message", "chartData", "chartPath", "success"}
    assert data["chartData"]["chartType"] == "bar"


def test_to_langchain_messages_roles():
    messages = to_langchain_messages([
        {"role": "system", "content": "s"},
        {"role": "user", "content": "u"},
        {"role": "assistant", "content": "a"},
    ])
    assert [type(m) for m in messages] == [SystemMessage, HumanMessage, AIMessage]


def test_max_steps_must_be_positive(chart_orchestrator):
    from chart_agent.agent import ChartAgent
    from conftest import FakeChatModel

    with pytest.raises(ValueError):
        ChartAgent(FakeChatModel([]), chart_orchestrator, max_steps=0)


@pytest.mark.asyncio
async def test_malformed_tool_call_fails_request(make_agent, chart_output_dir):
    agent, _ = make_agent([
        AIMessage(content="", invalid_tool_calls=[{
            "name": "create_bar_chart",
            "args": '{"labels": ["Q1", ',
            "id": "call_1",
            "error": "bad json",
        }]),
    ])

    response = await agent.process_request("Maak een staafgrafiek: Q1=100")

    assert response.success is False
    assert response.message == GENERIC_FAILURE_MESSAGE
    assert "malformed" in response.error
    assert response.chart_data is None
    assert not chart_output_dir.exists()


@pytest.mark.asyncio
async def test_empty_final_reply_fails_request(make_agent):
    agent, _ = make_agent([text_reply("")])

    response = await agent.process_request("Maak een grafiek")

    assert response.success is False
    assert response.message == GENERIC_FAILURE_MESSAGE
    assert "empty" in response.error


@pytest.mark.asyncio
async def test_empty_final_reply_after_chart_uses_default_message(make_agent, bar_chart_args):
    agent, _ = make_agent([tool_call_reply("create_bar_chart", bar_chart_args), text_reply("")])

    response = await agent.process_request("Staafgrafiek Q1=100, Q2=150")

    assert response.success is True
    assert response.message == "De grafiek is aangemaakt."
    assert response.chart_data is not None


@pytest.mark.asyncio
async def test_tools_run_off_the_event_loop(make_agent, bar_chart_args):
    agent, _ = make_agent([tool_call_reply("create_bar_chart", bar_chart_args), text_reply("Klaar.")])
    threads = []
    run = agent.chart_tools.run

    def recording_run(*args, **kwargs):
        threads.append(threading.get_ident())
        return run(*args, **kwargs)

    agent.chart_tools.run = recording_run

    response = await agent.process_request("Staafgrafiek Q1=100, Q2=150")

    assert response.success is True
    assert len(threads) == 1
    assert threads[0] != threading.get_ident()
