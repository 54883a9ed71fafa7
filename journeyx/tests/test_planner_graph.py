"""
Tests for the planner graph, prompt builder and model client wrapper.

The model is replaced by a fake llm_call, so no API key is needed.
"""

import asyncio
import json
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from journeyx.planner import ItineraryGenerator, create_planner_graph
from journeyx.planner.prompts import build_planner_prompt
from journeyx.shared.contracts import GroundingChunk, GroundingSource
from journeyx.shared.errors import (
    MalformedResponseError,
    SchemaValidationError,
    TransportError,
)
from journeyx.shared.llm import GenerationResult, call_llm


class FakeLLM:
    """Captures prompts and returns a fixed GenerationResult."""

    def __init__(self, text, grounding_chunks=None):
        self.result = GenerationResult(text=text, grounding_chunks=grounding_chunks or [])
        self.prompts = []

    async def __call__(self, prompt):
        self.prompts.append(prompt)
        return self.result


class TestBuildPlannerPrompt:
    def test_request_fields_are_embedded(self, trip_request):
        prompt = build_planner_prompt(trip_request)

        assert "日本京都" in prompt
        assert "2025-01-01 to 2025-01-03" in prompt
        assert "Members: 2 位成人." in prompt
        assert "Must Visit: 清水寺." in prompt
        assert "Accommodation: 京都車站附近." in prompt
        assert "Preferences: 步調輕鬆." in prompt
        assert '"tripTitle"' in prompt
        assert "Previous Feedback" not in prompt

    def test_adjustment_feedback_is_appended(self, trip_request):
        prompt = build_planner_prompt(trip_request, "  第二天想去嵐山 ")

        assert "Previous Feedback:" in prompt
        assert "第二天想去嵐山\n" in prompt

    def test_blank_feedback_is_ignored(self, trip_request):
        assert "Previous Feedback" not in build_planner_prompt(trip_request, "  ")


class TestCreatePlannerGraph:
    def test_graph_runs_with_only_a_model_call(self, trip_request, plan_dict):
        llm = FakeLLM(json.dumps(plan_dict))
        graph = create_planner_graph(llm)

        final_state = asyncio.run(
            graph.ainvoke(
                {
                    "request": trip_request,
                    "adjustments": None,
                    "session_id": "s1",
                    "prompt": None,
                    "raw_response": None,
                    "grounding_chunks": [],
                    "plan": None,
                }
            )
        )

        assert final_state["plan"].destination == "京都"
        assert final_state["prompt"] == llm.prompts[0]


class TestItineraryGenerator:
    """Runs the compiled graph end to end with a fake model."""

    def test_fenced_plan_is_validated(self, trip_request, plan_dict):
        chunk = GroundingChunk(web=GroundingSource(uri="https://example.com", title="ex"))
        llm = FakeLLM(
            "```json\n" + json.dumps(plan_dict, ensure_ascii=False) + "\n```",
            grounding_chunks=[chunk],
        )

        response = asyncio.run(ItineraryGenerator(llm_call=llm)(trip_request))

        assert response.plan.trip_title == "京都深度 3 日遊"
        assert response.grounding_chunks == [chunk]
        assert len(llm.prompts) == 1
        assert "Previous Feedback" not in llm.prompts[0]

    def test_adjustment_reaches_the_prompt(self, trip_request, plan_dict):
        llm = FakeLLM(json.dumps(plan_dict))

        asyncio.run(
            ItineraryGenerator(llm_call=llm)(trip_request, "少走一點路", session_id="s1")
        )

        assert "少走一點路" in llm.prompts[0]

    def test_malformed_output_propagates(self, trip_request):
        llm = FakeLLM("Sure! Here is your trip: ...")

        with pytest.raises(MalformedResponseError):
            asyncio.run(ItineraryGenerator(llm_call=llm)(trip_request))

    def test_non_finite_coordinate_is_malformed(self, trip_request, plan_dict):
        llm = FakeLLM(json.dumps(plan_dict).replace("34.9949", "Infinity"))

        with pytest.raises(MalformedResponseError):
            asyncio.run(ItineraryGenerator(llm_call=llm)(trip_request))

    def test_empty_output_is_malformed(self, trip_request):
        with pytest.raises(MalformedResponseError):
            asyncio.run(ItineraryGenerator(llm_call=FakeLLM(""))(trip_request))

    def test_schema_error_propagates(self, trip_request, plan_dict):
        plan_dict["visualVibe"] = "futuristic"
        llm = FakeLLM(json.dumps(plan_dict))

        with pytest.raises(SchemaValidationError) as excinfo:
            asyncio.run(ItineraryGenerator(llm_call=llm)(trip_request))

        assert "visualVibe" in str(excinfo.value)

    def test_transport_error_propagates(self, trip_request):
        async def failing_llm(prompt):
            raise TransportError("Generation request failed: 503")

        with pytest.raises(TransportError):
            asyncio.run(ItineraryGenerator(llm_call=failing_llm)(trip_request))


def _fake_client(content=None, error=None):
    async def create(**kwargs):
        create.kwargs = kwargs
        if error is not None:
            raise error
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create))), create


class TestCallLLM:
    def test_returns_stripped_text(self):
        client, create = _fake_client(content="  {}  \n")

        result = asyncio.run(call_llm("prompt", model="test-model", client=client))

        assert result.text == "{}"
        assert result.grounding_chunks == []
        assert create.kwargs["model"] == "test-model"
        assert create.kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    def test_missing_content_is_empty_text(self):
        client, _ = _fake_client(content=None)

        assert asyncio.run(call_llm("prompt", client=client)).text == ""

    def test_api_errors_become_transport_errors(self):
        client, _ = _fake_client(error=OpenAIError("quota exceeded"))

        with pytest.raises(TransportError) as excinfo:
            asyncio.run(call_llm("prompt", client=client))

        assert "quota exceeded" in str(excinfo.value)
