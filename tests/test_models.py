import copy

from bracketbuilder.models import (
    Match,
    Participant,
    Position,
    SoloSlot,
    TeamSlot,
    TeamType,
    TournamentDetails,
    slot_from_dict,
    slot_label,
)

ALICE = Participant("u1", "alice")
BOB = Participant("u2", "bob")


def test_slot_labels():
    assert slot_label(None) == "TBD"
    assert slot_label(SoloSlot(ALICE)) == "alice"
    assert slot_label(TeamSlot()) == "TBD"
    assert slot_label(TeamSlot((ALICE, BOB))) == "alice & bob"


def test_team_slot_players_unique():
    team = TeamSlot().with_player(ALICE)
    assert team.with_player(ALICE) is team
    assert team.with_player(BOB).without_player("u1").players == (BOB,)


def test_team_match_defaults():
    match = Match.team_match()
    assert match.team_type == TeamType.TEAM
    assert match.team1 == TeamSlot()
    assert match.rounds == 3
    assert match.is_terminal


def test_match_ids_are_unique():
    assert Match().id != Match().id


def test_match_to_dict_team():
    match = Match(
        id="m",
        position=Position(10, 20),
        team1=TeamSlot((ALICE,)),
        team_type=TeamType.TEAM,
    )
    data = match.to_dict()
    assert data["position"] == {"x": 10, "y": 20}
    assert data["team1"] == {
        "type": "team",
        "players": [{"id": "u1", "isGuest": False}],
        "score": 0,
    }
    assert data["team2"] is None
    assert data["score1"] == data["score2"] == 0


def test_participants_of_match():
    match = Match(team1=SoloSlot(ALICE), team2=TeamSlot((BOB, ALICE)))
    assert match.participant_ids() == ["u1", "u2", "u1"]


def test_deepcopy_keeps_equality():
    match = Match(team1=SoloSlot(ALICE))
    assert copy.deepcopy(match) == match


def test_tournament_details_from_dict():
    details = TournamentDetails.from_dict({"name": "Cup", "location": None})
    assert details.location == ""
    assert details.format == "single elimination"


def test_match_from_dict_reads_to_dict_output():
    match = Match(
        id="m",
        position=Position(10, 20),
        team1=TeamSlot((ALICE, BOB), score=2),
        team2=TeamSlot(),
        next_match_id="n",
        rounds=5,
        team_type=TeamType.TEAM,
    )
    lookup = {"u1": ALICE, "u2": BOB}.get
    assert Match.from_dict(match.to_dict(), lookup) == match


def test_match_from_dict_snake_case_and_defaults():
    match = Match.from_dict({"id": 7, "next_match_id": 8, "team_type": "team"})
    assert match.id == "7"
    assert match.next_match_id == "8"
    assert match.team1 == TeamSlot()
    assert match.position == Position()
    assert match.rounds == 3


def test_slot_from_dict_unknown_participant_is_placeholder():
    slot = slot_from_dict({"userId": 42})
    assert slot == SoloSlot(Participant("42", "42"))
    assert slot_from_dict(None) is None
    team = slot_from_dict({"players": [{"id": "g", "isGuest": True}, "g"]})
    assert team.players == (Participant("g", "g", is_guest=True),)
