from __future__ import annotations
import logging
from types import SimpleNamespace as NS

import pytest

from lente_local.errors import ConfigurationError, GatewayError
from lente_local.gemini import GeminiGateway, build_search_config, extract_citations
from lente_local.i18n import tr
from lente_local.models import Location, ReviewSnippet


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def grounded_response():
    chunks = [
        NS(maps=None, web=NS(uri="https://pt.wikipedia.org/wiki/Torre_Eiffel", title="Wikipedia")),
        NS(maps=NS(
            uri="https://maps.google.com/?cid=1",
            title="Torre Eiffel",
            place_answer_sources=NS(review_snippets=[
                NS(google_maps_uri="https://maps.google.com/?cid=1&r=1", title="Ótima vista"),
            ]),
        ), web=None),
        NS(maps=None, web=None),
        NS(maps=NS(uri="https://maps.google.com/?cid=2", title="Champ de Mars", place_answer_sources=None), web=None),
    ]
    candidate = NS(grounding_metadata=NS(grounding_chunks=chunks))
    return NS(text="A Torre Eiffel fica em Paris.", candidates=[candidate])


def make_gateway(models, api_key="test-key"):
    created = []

    def factory(key):
        created.append(key)
        return NS(models=models)

    gw = GeminiGateway(
        api_key_provider=lambda: api_key,
        client_factory=factory,
        search_model="search-model",
        details_model="details-model",
    )
    return gw, created


def test_search_config_with_location_sets_lat_lng():
    config = build_search_config(Location(-23.56, -46.65))
    assert config.tools[0].google_maps is not None
    lat_lng = config.tool_config.retrieval_config.lat_lng
    assert lat_lng.latitude == -23.56
    assert lat_lng.longitude == -46.65


def test_search_config_without_location_has_no_tool_config():
    config = build_search_config(None)
    assert config.tools[0].google_maps is not None
    assert config.tool_config is None


def test_extract_citations_keeps_order_and_drops_empty_chunks():
    citations = extract_citations(grounded_response())
    assert len(citations) == 3
    assert citations[0].web.title == "Wikipedia" and citations[0].maps is None
    assert citations[1].maps.title == "Torre Eiffel"
    assert citations[1].maps.review_snippets == (
        ReviewSnippet(uri="https://maps.google.com/?cid=1&r=1", title="Ótima vista", text=""),
    )
    assert citations[2].maps.review_snippets == ()


@pytest.mark.parametrize("response", [
    NS(text="x", candidates=None),
    NS(text="x", candidates=[]),
    NS(text="x", candidates=[NS(grounding_metadata=None)]),
    NS(text="x", candidates=[NS(grounding_metadata=NS(grounding_chunks=None))]),
])
def test_extract_citations_tolerates_missing_metadata(response):
    assert extract_citations(response) == []


def test_search_with_maps_calls_search_model():
    models = FakeModels(grounded_response())
    gw, created = make_gateway(models)
    result = gw.search_with_maps("torre eiffel", Location(48.85, 2.29))
    call = models.calls[0]
    assert call["model"] == "search-model"
    assert call["contents"] == "torre eiffel"
    assert call["config"].tool_config.retrieval_config.lat_lng.latitude == 48.85
    assert created == ["test-key"]
    assert result.text == "A Torre Eiffel fica em Paris."
    assert result.primary_map_title == "Torre Eiffel"


def test_search_with_maps_none_text_becomes_empty():
    gw, _ = make_gateway(FakeModels(NS(text=None, candidates=[])))
    result = gw.search_with_maps("nada")
    assert result.text == ""
    assert result.citations == []
    assert result.primary_map_title is None


def test_missing_api_key_raises_configuration_error():
    models = FakeModels(grounded_response())
    gw, created = make_gateway(models, api_key=None)
    with pytest.raises(ConfigurationError) as info:
        gw.search_with_maps("praça da sé")
    assert isinstance(info.value, GatewayError)
    assert str(info.value) == tr("errors.missing_api_key")
    assert created == []
    assert models.calls == []


def test_api_key_is_resolved_on_every_call():
    keys = iter([None, "late-key"])
    created = []
    gw = GeminiGateway(
        api_key_provider=lambda: next(keys),
        client_factory=lambda key: created.append(key) or NS(models=FakeModels(NS(text="ok", candidates=[]))),
    )
    with pytest.raises(ConfigurationError):
        gw.get_additional_details("MASP")
    assert gw.get_additional_details("MASP") == "ok"
    assert created == ["late-key"]


def test_remote_failure_is_wrapped_and_logged(caplog):
    caplog.set_level(logging.ERROR, logger="lente_local.gemini")
    boom = RuntimeError("503 UNAVAILABLE")
    gw, _ = make_gateway(FakeModels(error=boom))
    with pytest.raises(GatewayError) as info:
        gw.search_with_maps("cafés perto de mim")
    assert str(info.value) == tr("errors.gateway_search")
    assert info.value.__cause__ is boom
    assert any("503 UNAVAILABLE" in r.getMessage() for r in caplog.records)


def test_client_construction_failure_is_a_gateway_error():
    def factory(key):
        raise ValueError("bad client")

    gw = GeminiGateway(api_key_provider=lambda: "k", client_factory=factory)
    with pytest.raises(GatewayError) as info:
        gw.get_additional_details("Parque Ibirapuera")
    assert not isinstance(info.value, ConfigurationError)
    assert str(info.value) == tr("errors.gateway_details")


def test_additional_details_uses_prompt_template_without_tools():
    models = FakeModels(NS(text="## Curiosidades", candidates=[]))
    gw, _ = make_gateway(models)
    text = gw.get_additional_details("Theatro Municipal")
    call = models.calls[0]
    assert call["model"] == "details-model"
    assert '"Theatro Municipal"' in call["contents"]
    assert "markdown" in call["contents"]
    assert "config" not in call
    assert text == "## Curiosidades"


def test_additional_details_failure():
    gw, _ = make_gateway(FakeModels(error=ConnectionError("reset")))
    with pytest.raises(GatewayError) as info:
        gw.get_additional_details("Pelourinho")
    assert str(info.value) == tr("errors.gateway_details")
