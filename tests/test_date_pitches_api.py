from datetime import timedelta

from tests.conftest import GOING, INTERESTED, NOW, ORGANIZER, OUTSIDER, PITCH_DEADLINE, VOTING_DEADLINE, auth

BOB, CAROL = GOING


def _settings(client, trip_id, deadline, days=None, user=ORGANIZER):
    payload = {"date_pitch_deadline": deadline.isoformat()}
    if days is not None:
        payload["voting_deadline_duration_days"] = days
    return client.put(f"/trips/{trip_id}/date-pitch-settings", json=payload, headers=auth(user))


def _pitch(client, trip_id, start="2026-06-01", end="2026-06-05", user=BOB):
    return client.post(
        f"/trips/{trip_id}/date-pitches/",
        json={"start_date": start, "end_date": end},
        headers=auth(user),
    )


def _vote(client, pitch_id, vote_type, dates=None, user=BOB):
    payload = {"vote_type": vote_type}
    if dates is not None:
        payload["selected_dates"] = dates
    return client.post(f"/date-pitches/{pitch_id}/votes", json=payload, headers=auth(user))


# ---------- settings ----------

def test_settings_expose_the_voting_deadline(client, scheduled_trip):
    assert scheduled_trip["voting_deadline_duration_days"] == 7
    assert scheduled_trip["pitch_window"] == "PROPOSALS_OPEN"
    assert scheduled_trip["voting_deadline"] is not None


def test_rejected_settings_leave_the_trip_unchanged(client, scheduled_trip):
    trip_id = scheduled_trip["id"]
    resp = _settings(client, trip_id, NOW - timedelta(minutes=1), 7)
    assert resp.status_code == 422
    assert resp.json()["code"] == "InvalidDeadline"

    resp = _settings(client, trip_id, NOW + timedelta(days=3), 0)
    assert resp.status_code == 422
    assert resp.json()["code"] == "InvalidDuration"

    resp = _settings(client, trip_id, NOW, 3)
    assert resp.status_code == 422

    after = client.get(f"/trips/{trip_id}", headers=auth(ORGANIZER)).json()
    assert after["date_pitch_deadline"] == scheduled_trip["date_pitch_deadline"]
    assert after["voting_deadline_duration_days"] == 7


def test_only_organizer_sets_the_deadline(client, trip):
    resp = _settings(client, trip["id"], PITCH_DEADLINE, 7, user=BOB)
    assert resp.status_code == 403


def test_omitted_duration_keeps_the_current_value(client, scheduled_trip):
    resp = _settings(client, scheduled_trip["id"], PITCH_DEADLINE + timedelta(days=1))
    assert resp.status_code == 200
    assert resp.json()["voting_deadline_duration_days"] == 7


# ---------- pitching ----------

def test_pitching_requires_a_deadline(client, trip):
    resp = _pitch(client, trip["id"])
    assert resp.status_code == 409
    assert resp.json()["code"] == "DeadlineMissing"


def test_pitch_is_accepted_until_the_deadline_instant(client, clock, scheduled_trip):
    clock.set(PITCH_DEADLINE - timedelta(microseconds=1))
    resp = _pitch(client, scheduled_trip["id"])
    assert resp.status_code == 201
    data = resp.json()
    assert data["state"] == "PROPOSALS_OPEN"
    assert data["pitched_by"] == {"id": BOB, "username": BOB}
    assert data["votes"] == []
    assert data["results"] is None

    clock.set(PITCH_DEADLINE)
    resp = _pitch(client, scheduled_trip["id"])
    assert resp.status_code == 409
    assert resp.json()["code"] == "DeadlinePassed"


def test_pitch_range_must_be_ordered(client, scheduled_trip):
    resp = _pitch(client, scheduled_trip["id"], start="2026-06-05", end="2026-06-01")
    assert resp.status_code == 422
    assert resp.json()["code"] == "InvalidRange"

    resp = _pitch(client, scheduled_trip["id"], start="2026-06-05", end="2026-06-05")
    assert resp.status_code == 422


def test_only_going_participants_pitch(client, scheduled_trip):
    assert _pitch(client, scheduled_trip["id"], user=INTERESTED).status_code == 403
    assert _pitch(client, scheduled_trip["id"], user=OUTSIDER).status_code == 403
    assert _pitch(client, scheduled_trip["id"], user=ORGANIZER).status_code == 201


def test_pitching_outside_dates_phase(client, scheduled_trip):
    client.post(f"/trips/{scheduled_trip['id']}/advance-phase", headers=auth(ORGANIZER))
    resp = _pitch(client, scheduled_trip["id"])
    assert resp.status_code == 409
    assert resp.json()["code"] == "InvalidPhase"


def test_list_is_newest_first(client, june_pitch):
    trip_id = june_pitch["trip_id"]
    second = _pitch(client, trip_id, start="2026-07-01", end="2026-07-04", user=CAROL).json()

    pitches = client.get(f"/trips/{trip_id}/date-pitches/", headers=auth(INTERESTED)).json()
    assert [p["id"] for p in pitches] == [second["id"], june_pitch["id"]]

    resp = client.get(f"/trips/{trip_id}/date-pitches/", headers=auth(OUTSIDER))
    assert resp.status_code == 403


# ---------- voting ----------

def test_votes_only_inside_the_voting_window(client, clock, june_pitch):
    resp = _vote(client, june_pitch["id"], "ALL_WORK")
    assert resp.status_code == 409
    assert resp.json()["code"] == "VotingNotOpen"

    clock.set(PITCH_DEADLINE)
    assert _vote(client, june_pitch["id"], "ALL_WORK").status_code == 200

    clock.set(VOTING_DEADLINE - timedelta(microseconds=1))
    assert _vote(client, june_pitch["id"], "NONE_WORK").status_code == 200

    clock.set(VOTING_DEADLINE)
    resp = _vote(client, june_pitch["id"], "ALL_WORK")
    assert resp.status_code == 409
    assert resp.json()["code"] == "VotingClosed"


def test_revote_replaces_previous_vote(client, clock, june_pitch):
    clock.set(PITCH_DEADLINE)
    first = _vote(client, june_pitch["id"], "PARTIAL", ["2026-06-02", "2026-06-01"]).json()
    assert first["selected_dates"] == ["2026-06-01", "2026-06-02"]

    second = _vote(client, june_pitch["id"], "ALL_WORK").json()
    assert second["id"] == first["id"]
    assert second["selected_dates"] is None

    pitches = client.get(f"/trips/{june_pitch['trip_id']}/date-pitches/", headers=auth(BOB)).json()
    assert len(pitches[0]["votes"]) == 1
    assert pitches[0]["votes"][0]["vote_type"] == "ALL_WORK"


def test_vote_validation(client, clock, june_pitch):
    clock.set(PITCH_DEADLINE)
    resp = _vote(client, june_pitch["id"], "SOMETIMES")
    assert resp.status_code == 422
    assert resp.json()["code"] == "InvalidVoteType"

    resp = _vote(client, june_pitch["id"], "PARTIAL", [])
    assert resp.json()["code"] == "InvalidSelectedDates"

    resp = _vote(client, june_pitch["id"], "PARTIAL", ["2026-06-09"])
    assert resp.json()["code"] == "InvalidSelectedDates"

    resp = _vote(client, june_pitch["id"], "PARTIAL", ["June 2nd"])
    assert resp.status_code == 422
    assert resp.json()["code"] == "InvalidSelectedDates"


def test_only_going_participants_vote(client, clock, june_pitch):
    clock.set(PITCH_DEADLINE)
    assert _vote(client, june_pitch["id"], "ALL_WORK", user=INTERESTED).status_code == 403
    assert _vote(client, june_pitch["id"], "ALL_WORK", user=OUTSIDER).status_code == 403
    assert _vote(client, 9999, "ALL_WORK").status_code == 404


def test_best_range_from_mixed_votes(client, clock, june_pitch):
    results_url = f"/date-pitches/{june_pitch['id']}/results"
    assert client.get(results_url, headers=auth(BOB)).json() is None

    clock.set(PITCH_DEADLINE)
    _vote(client, june_pitch["id"], "ALL_WORK", user=BOB)
    _vote(client, june_pitch["id"], "PARTIAL", ["2026-06-01", "2026-06-02"], user=CAROL)
    _vote(client, june_pitch["id"], "NONE_WORK", user=ORGANIZER)

    results = client.get(results_url, headers=auth(INTERESTED)).json()
    assert results["start_date"] == "2026-06-01"
    assert results["end_date"] == "2026-06-02"
    assert results["score"] == 2002
    assert results["unavailable"] == [ORGANIZER]
    assert [d["date"] for d in results["dates"]] == ["2026-06-01", "2026-06-02"]

    listed = client.get(f"/trips/{june_pitch['trip_id']}/date-pitches/", headers=auth(BOB)).json()
    assert listed[0]["state"] == "VOTING_OPEN"
    assert listed[0]["results"]["score"] == 2002


def test_new_deadline_reopens_closed_voting(client, clock, june_pitch):
    clock.set(VOTING_DEADLINE + timedelta(days=1))
    assert _vote(client, june_pitch["id"], "ALL_WORK").json()["code"] == "VotingClosed"

    # past deadlines are refused, so set one ahead and let the clock reach it
    resp = _settings(client, june_pitch["trip_id"], clock.now() + timedelta(hours=1), 2)
    assert resp.status_code == 200
    assert resp.json()["pitch_window"] == "PROPOSALS_OPEN"

    clock.advance(timedelta(hours=1))
    assert _vote(client, june_pitch["id"], "ALL_WORK").status_code == 200
    pitch = client.get(f"/trips/{june_pitch['trip_id']}/date-pitches/", headers=auth(BOB)).json()[0]
    assert pitch["state"] == "VOTING_OPEN"


def test_oversized_voting_duration_is_rejected_and_trip_stays_usable(client, scheduled_trip):
    trip_id = scheduled_trip["id"]
    resp = _settings(client, trip_id, PITCH_DEADLINE, 1000000000)
    assert resp.status_code == 422
    assert resp.json()["code"] == "InvalidDuration"

    resp = _settings(client, trip_id, PITCH_DEADLINE, 366)
    assert resp.json()["code"] == "InvalidDuration"

    after = client.get(f"/trips/{trip_id}", headers=auth(ORGANIZER))
    assert after.status_code == 200
    assert after.json()["voting_deadline_duration_days"] == 7
    assert after.json()["date_pitch_deadline"] == scheduled_trip["date_pitch_deadline"]
    assert client.get("/trips/", headers=auth(ORGANIZER)).status_code == 200
    assert _pitch(client, trip_id).status_code == 201


def test_deadline_at_the_end_of_the_calendar_is_rejected(client, scheduled_trip):
    resp = client.put(
        f"/trips/{scheduled_trip['id']}/date-pitch-settings",
        json={"date_pitch_deadline": "9999-12-30T00:00:00+00:00", "voting_deadline_duration_days": 7},
        headers=auth(ORGANIZER),
    )
    assert resp.status_code == 422
    assert resp.json()["code"] == "InvalidDeadline"

    after = client.get(f"/trips/{scheduled_trip['id']}", headers=auth(ORGANIZER)).json()
    assert after["date_pitch_deadline"] == scheduled_trip["date_pitch_deadline"]


def test_settings_for_unknown_trip(client, users):
    resp = _settings(client, 9999, PITCH_DEADLINE, 7)
    assert resp.status_code == 404
    assert resp.json()["code"] == "NotFound"


def test_settings_outside_dates_phase(client, trip):
    client.post(f"/trips/{trip['id']}/advance-phase", headers=auth(ORGANIZER))
    resp = _settings(client, trip["id"], PITCH_DEADLINE, 7)
    assert resp.status_code == 409
    assert resp.json()["code"] == "InvalidPhase"


def test_voting_after_leaving_dates_phase(client, clock, june_pitch):
    clock.set(PITCH_DEADLINE)
    client.post(f"/trips/{june_pitch['trip_id']}/advance-phase", headers=auth(ORGANIZER))
    resp = _vote(client, june_pitch["id"], "ALL_WORK")
    assert resp.status_code == 409
    assert resp.json()["code"] == "InvalidPhase"


def test_date_pitch_endpoints_require_identity(client, clock, june_pitch):
    trip_id = june_pitch["trip_id"]
    resp = client.post(f"/trips/{trip_id}/date-pitches/", json={"start_date": "2026-06-01", "end_date": "2026-06-03"})
    assert resp.status_code == 401
    assert resp.json()["code"] == "Unauthenticated"

    resp = client.get(f"/trips/{trip_id}/date-pitches/")
    assert resp.status_code == 401
    assert resp.json()["code"] == "Unauthenticated"

    clock.set(PITCH_DEADLINE)
    resp = client.post(f"/date-pitches/{june_pitch['id']}/votes", json={"vote_type": "ALL_WORK"})
    assert resp.status_code == 401
    assert resp.json()["code"] == "Unauthenticated"


def test_pitch_range_is_capped_at_a_year(client, scheduled_trip):
    assert _pitch(client, scheduled_trip["id"], start="2026-06-01", end="2027-06-01").status_code == 201

    resp = _pitch(client, scheduled_trip["id"], start="0001-01-01", end="9999-12-31")
    assert resp.status_code == 422
    assert resp.json()["code"] == "InvalidRange"
