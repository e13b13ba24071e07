from design_rules.models import DesignElements, Typography
from design_rules.session import AnalysisSession, SessionState

RESULT = DesignElements(colors=("#ff0000",), typography=Typography(("Inter",), (16,), (400,)))


def test_starts_idle():
    snap = AnalysisSession().snapshot()
    assert snap.state is SessionState.idle
    assert snap.request_id is None
    assert snap.to_dict()["designElements"] is None


def test_begin_then_complete():
    session = AnalysisSession()
    rid = session.begin()
    assert session.snapshot().state is SessionState.analyzing
    assert session.complete(rid, RESULT, "# rule")

    snap = session.snapshot()
    assert snap.state is SessionState.complete
    assert snap.request_id == rid
    assert snap.result is RESULT
    assert snap.to_dict()["designElements"]["colors"] == ["#ff0000"]


def test_latest_upload_wins():
    session = AnalysisSession()
    first = session.begin()
    second = session.begin()
    assert first != second

    # the older analysis finishes late and is dropped
    assert not session.complete(first, RESULT)
    assert session.snapshot().state is SessionState.analyzing
    assert session.snapshot().request_id == second

    assert session.complete(second, RESULT)
    assert not session.complete(first, RESULT)
    assert session.snapshot().request_id == second


def test_complete_twice_is_rejected():
    session = AnalysisSession()
    rid = session.begin()
    assert session.complete(rid, RESULT)
    assert not session.complete(rid, RESULT)


def test_fail_only_affects_current_request():
    session = AnalysisSession()
    old = session.begin()
    new = session.begin()
    assert not session.fail(old)
    assert session.snapshot().request_id == new
    assert session.fail(new)
    assert session.snapshot().state is SessionState.idle


def test_reset_drops_in_flight_result():
    session = AnalysisSession()
    rid = session.begin()
    session.reset()
    assert not session.complete(rid, RESULT)
    assert session.snapshot().state is SessionState.idle
