from __future__ import annotations

from lente_local.errors import GatewayError
from lente_local.i18n import tr
from lente_local.models import Citation, Location, MapsSource, SearchResult, WebSource
from lente_local.viewmodel import DetailsPhase, LenteViewModel, SearchPhase


class ManualRunner:
    """Holds submitted jobs until the test resolves them."""

    def __init__(self):
        self.jobs = []

    def submit(self, job, on_success, on_failure):
        self.jobs.append((job, on_success, on_failure))

    def resolve(self, index=0):
        job, on_success, on_failure = self.jobs.pop(index)
        try:
            result = job()
        except Exception as e:
            on_failure(e)
        else:
            on_success(result)


class FakeGateway:
    def __init__(self):
        self.search_calls = []
        self.details_calls = []
        self.search_result = SearchResult("Resposta", [])
        self.details_text = "## Fatos"
        self.fail = False

    def search_with_maps(self, query, location=None):
        self.search_calls.append((query, location))
        if self.fail:
            raise GatewayError("boom")
        return self.search_result

    def get_additional_details(self, topic):
        self.details_calls.append(topic)
        if self.fail:
            raise GatewayError("boom")
        return self.details_text


def make_vm():
    gateway = FakeGateway()
    runner = ManualRunner()
    vm = LenteViewModel(gateway, runner)
    return vm, gateway, runner


def test_blank_query_does_not_search():
    vm, gateway, runner = make_vm()
    vm.set_query("   ")
    vm.run_search()
    assert runner.jobs == []
    assert vm.search_phase is SearchPhase.IDLE


def test_search_success_populates_result_and_primary_map_title():
    vm, gateway, runner = make_vm()
    gateway.search_result = SearchResult("Paris", [
        Citation(web=WebSource("w", "Wiki")),
        Citation(maps=MapsSource("u1", "Eiffel Tower")),
        Citation(maps=MapsSource("u2", "Other")),
    ])
    vm.set_query("torre eiffel")
    vm.set_location(Location(48.85, 2.29))
    vm.run_search()
    assert vm.is_loading
    runner.resolve()
    assert gateway.search_calls == [("torre eiffel", Location(48.85, 2.29))]
    assert vm.search_phase is SearchPhase.SUCCEEDED
    assert not vm.is_loading
    assert vm.result_text == "Paris"
    assert len(vm.citations) == 3
    assert vm.primary_map_title == "Eiffel Tower"
    assert vm.result_query == "torre eiffel"


def test_search_failure_sets_generic_error():
    vm, gateway, runner = make_vm()
    gateway.fail = True
    vm.set_query("cafés")
    vm.run_search()
    runner.resolve()
    assert vm.search_phase is SearchPhase.FAILED
    assert vm.error == tr("errors.search")
    assert vm.result is None
    assert not vm.is_loading


def test_second_search_while_pending_is_ignored():
    vm, gateway, runner = make_vm()
    vm.set_query("praia")
    vm.run_search()
    vm.run_search()
    assert len(runner.jobs) == 1
    runner.resolve()
    assert len(gateway.search_calls) == 1
    vm.run_search()
    assert len(runner.jobs) == 1


def test_new_search_clears_previous_state():
    vm, gateway, runner = make_vm()
    vm.set_query("museu")
    vm.run_search(); runner.resolve()
    vm.run_details(); runner.resolve()
    assert vm.additional_details == "## Fatos"
    vm.run_search()
    assert vm.result is None
    assert vm.additional_details == ""
    assert vm.details_phase is DetailsPhase.IDLE
    assert vm.error is None


def test_details_success_and_guard():
    vm, gateway, runner = make_vm()
    vm.set_query("Ibirapuera")
    vm.run_search(); runner.resolve()
    vm.run_details()
    vm.run_details()
    assert len(runner.jobs) == 1
    assert vm.is_fetching_details
    runner.resolve()
    assert gateway.details_calls == ["Ibirapuera"]
    assert vm.details_phase is DetailsPhase.SUCCEEDED
    assert vm.additional_details == "## Fatos"


def test_details_without_result_is_noop():
    vm, gateway, runner = make_vm()
    vm.run_details()
    vm.set_query("Ibirapuera")
    vm.run_details()
    assert runner.jobs == []


def test_details_failure_sets_generic_error():
    vm, gateway, runner = make_vm()
    vm.set_query("Ibirapuera")
    vm.run_search(); runner.resolve()
    gateway.fail = True
    vm.run_details()
    runner.resolve()
    assert vm.details_phase is DetailsPhase.FAILED
    assert vm.details_error == tr("errors.details")


def test_search_and_details_may_overlap():
    vm, gateway, runner = make_vm()
    vm.set_query("Pinacoteca")
    vm.run_search(); runner.resolve()
    vm.run_details()
    vm.set_query("Pinacoteca do Estado")
    vm.run_search()
    assert len(runner.jobs) == 2


def test_stale_details_are_discarded_after_new_search():
    vm, gateway, runner = make_vm()
    vm.set_query("Copacabana")
    vm.run_search(); runner.resolve()
    vm.run_details()  # job 0, still pending
    vm.set_query("Ipanema")
    vm.run_search()  # job 1
    assert not vm.is_fetching_details
    runner.resolve(0)  # late elaboration for Copacabana
    assert vm.additional_details == ""
    assert vm.details_phase is DetailsPhase.IDLE
    runner.resolve(0)
    assert vm.result_query == "Ipanema"
    vm.run_details()
    runner.resolve()
    assert gateway.details_calls == ["Copacabana", "Ipanema"]
    assert vm.additional_details == "## Fatos"


def test_changed_signal_fires_on_transitions():
    vm, gateway, runner = make_vm()
    events = []
    vm.changed.connect(lambda: events.append(vm.search_phase))
    vm.set_query("Sé")
    vm.run_search()
    runner.resolve()
    assert events == [SearchPhase.IDLE, SearchPhase.SEARCHING, SearchPhase.SUCCEEDED]


def test_query_changed_only_on_real_change():
    vm, _, _ = make_vm()
    seen = []
    vm.query_changed.connect(seen.append)
    vm.set_query("a")
    vm.set_query("a")
    vm.set_query("")
    assert seen == ["a", ""]


def test_details_follow_the_shown_result_not_the_edited_input():
    vm, gateway, runner = make_vm()
    vm.set_query("Copacabana")
    vm.run_search(); runner.resolve()
    vm.set_query("Ipanema")
    vm.run_details(); runner.resolve()
    assert gateway.details_calls == ["Copacabana"]
    assert vm.result_query == "Copacabana"
    assert vm.additional_details == "## Fatos"


def test_result_revision_ignores_typing():
    vm, gateway, runner = make_vm()
    vm.set_query("Sé")
    vm.run_search(); runner.resolve()
    shown = vm.result_revision
    vm.set_query("Sé Catedral")
    vm.set_location(Location(1.0, 2.0))
    assert vm.result_revision == shown
    vm.run_search()
    assert vm.result_revision == shown + 1
    runner.resolve()
    assert vm.result_revision == shown + 2
