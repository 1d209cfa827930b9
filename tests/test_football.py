# tests/test_football.py
import random

import pytest

from courtside.data.models import (
    FixtureStatus,
    FootballPlayer,
    FootballPosition,
    FootballTeam,
    KnockoutSettings,
    KnockoutTeamStatus,
    MatchEvent,
    MatchEventType,
    SeedingStrategy,
    TournamentStage,
    TournamentStatus,
)
from courtside.domain.football_team_store import FootballTeamStore
from courtside.domain.knockout_tournament_store import (
    KnockoutTournamentStore,
    seed_order,
    stage_for_round,
)


@pytest.fixture
def team_store():
    """Team store with six registered players"""
    return FootballTeamStore([
        FootballPlayer(id="p1", name="Sunil Chhetri", position=FootballPosition.STRIKER, is_registered=True),
        FootballPlayer(id="p2", name="Gurpreet Singh", position=FootballPosition.GOALKEEPER, images=["a.png"]),
        FootballPlayer(id="p3", name="Sandesh Jhingan", position=FootballPosition.CENTRE_BACK),
        FootballPlayer(id="p4", name="Anirudh Thapa", position=FootballPosition.CENTRAL_MIDFIELDER),
        FootballPlayer(id="p5", name="Lallianzuala Chhangte", position=FootballPosition.RIGHT_WINGER),
        FootballPlayer(id="p6", name="Rahul Bheke", position=FootballPosition.RIGHT_BACK),
    ])


def _register_teams(team_store, count):
    return [
        team_store.add_team(FootballTeam(team_name=f"T{n}", city="Delhi" if n % 2 else "Goa"))
        for n in range(1, count + 1)
    ]


def _knockout(team_store, count, storage=None, strategy=SeedingStrategy.SEEDED):
    """Knockout store with a tournament of ``count`` teams, seeded in registration order"""
    teams = _register_teams(team_store, count)
    store = KnockoutTournamentStore(team_store, storage, rng=random.Random(7))
    store.start_knockout_tournament_creation("Monsoon Cup")
    store.update_knockout_creation_draft(team_count=count, seeding_strategy=strategy.value)
    for team in teams:
        store.add_team_to_knockout_draft(team.id)
    return store, store.create_knockout_tournament()


def _goal(team_id, minute, sub_type=None):
    return MatchEvent(team_id=team_id, event_type=MatchEventType.GOAL, event_sub_type=sub_type,
                      player_id="p1", player_name="Sunil Chhetri", minute=minute)


# --- Teams and players ---

def test_add_team_resets_server_fields(team_store):
    """Test that a new team gets a fresh id, zeroed counters and becomes current"""
    team = team_store.add_team(FootballTeam(id="custom", team_name="Lions", matches_played=5, matches_won=3))

    assert team.id.startswith("team_")
    assert team.matches_played == 0
    assert team.matches_won == 0
    assert team.created_at
    assert team_store.current_team == team


def test_membership_errors(team_store):
    """Test every rejected membership change and its message"""
    team = team_store.add_team(FootballTeam(team_name="Lions", max_players=2))

    assert team_store.add_player_to_team(team.id, "ghost") is None
    assert team_store.error == "Player not found"
    assert team_store.add_player_to_team("missing", "p1") is None
    assert team_store.error == "Team not found"

    team_store.add_player_to_team(team.id, "p1")
    assert team_store.error is None
    assert team_store.add_player_to_team(team.id, "p1") is None
    assert team_store.error == "Player is already in this team"

    team_store.add_player_to_team(team.id, "p2")
    assert team_store.add_player_to_team(team.id, "p3") is None
    assert team_store.error == "Team is at maximum capacity"
    assert team_store.get_team_by_id(team.id).member_player_ids == ["p1", "p2"]

    team_store.clear_error()
    assert team_store.error is None


def test_delete_player_leaves_rosters(team_store):
    """Test that deleting a player removes them from every team"""
    lions, tigers = _register_teams(team_store, 2)
    team_store.add_player_to_team(lions.id, "p1")
    team_store.add_player_to_team(lions.id, "p2")
    team_store.add_player_to_team(tigers.id, "p1")

    assert team_store.delete_player("p1") is True

    assert team_store.get_team_by_id(lions.id).member_player_ids == ["p2"]
    assert team_store.get_team_by_id(tigers.id).member_player_ids == []
    assert team_store.delete_player("p1") is False


def test_team_players_and_availability(team_store):
    team = team_store.add_team(FootballTeam(team_name="Lions"))
    team_store.add_player_to_team(team.id, "p3")
    team_store.add_player_to_team(team.id, "p1")

    assert [p.id for p in team_store.get_team_players(team.id)] == ["p3", "p1"]
    assert [p.id for p in team_store.get_available_players_for_team(team.id)] == ["p2", "p4", "p5", "p6"]
    assert team_store.is_player_in_team(team.id, "p3") is True
    assert team_store.is_player_in_team(team.id, "p4") is False

    team_store.remove_player_from_team(team.id, "p3")
    assert team_store.get_team_by_id(team.id).member_player_ids == ["p1"]


def test_search_and_city_lookup(team_store):
    """Test search by team name, city and member name"""
    lions = team_store.add_team(FootballTeam(team_name="Lions", city="Delhi"))
    tigers = team_store.add_team(FootballTeam(team_name="Tigers", city="Goa"))
    team_store.add_player_to_team(tigers.id, "p2")

    assert [t.id for t in team_store.search_teams("lion")] == [lions.id]
    assert [t.id for t in team_store.search_teams("GOA")] == [tigers.id]
    assert [t.id for t in team_store.search_teams("gurpreet")] == [tigers.id]
    assert [t.id for t in team_store.get_teams_by_city("delhi")] == [lions.id]


def test_stats(team_store):
    lions, tigers = _register_teams(team_store, 2)
    team_store.add_player_to_team(lions.id, "p1")
    team_store.add_player_to_team(lions.id, "p2")
    team_store.add_player_to_team(tigers.id, "p3")

    assert team_store.get_team_stats() == {
        "total_teams": 2,
        "active_teams": 2,
        "total_players": 3,
        "average_team_size": 1.5,
    }
    player_stats = team_store.get_player_stats()
    assert player_stats["total_players"] == 6
    assert player_stats["registered_players"] == 1
    assert player_stats["players_with_images"] == 1
    assert player_stats["players_by_position"]["Goalkeeper"] == 1
    assert [p.id for p in team_store.get_players_by_position(FootballPosition.STRIKER)] == ["p1"]


def test_delete_current_team(team_store):
    team = team_store.add_team(FootballTeam(team_name="Lions"))

    assert team_store.delete_team(team.id) is True
    assert team_store.current_team is None


# --- Bracket helpers ---

def test_seed_order():
    assert seed_order(2) == [1, 2]
    assert seed_order(4) == [1, 4, 2, 3]
    assert seed_order(8) == [1, 8, 4, 5, 2, 7, 3, 6]


def test_stage_for_round():
    assert stage_for_round(1, 3) is TournamentStage.QUARTER_FINAL
    assert stage_for_round(3, 3) is TournamentStage.FINAL
    assert stage_for_round(1, 5) is TournamentStage.ROUND_OF_32


# --- Knockout creation ---

def test_seeded_bracket(team_store):
    """Test that seeds meet 1v8, 4v5, 2v7, 3v6 and later rounds wait for winners"""
    store, tournament_id = _knockout(team_store, 8)
    tournament = store.get_knockout_tournament(tournament_id)

    assert tournament_id.startswith("knockout_")
    assert tournament.name == "Monsoon Cup"
    assert tournament.total_rounds == 3
    assert tournament.current_stage is TournamentStage.QUARTER_FINAL
    assert tournament.status is TournamentStatus.DRAFT

    quarter_finals = store.get_fixtures_by_stage(tournament_id, TournamentStage.QUARTER_FINAL)
    pairs = [(f.home_team_name, f.away_team_name) for f in quarter_finals]
    assert pairs == [("T1", "T8"), ("T4", "T5"), ("T2", "T7"), ("T3", "T6")]

    fixtures = store.get_knockout_fixtures(tournament_id)
    assert [f.match_number for f in fixtures] == list(range(1, 8))
    semi_finals = store.get_fixtures_by_stage(tournament_id, TournamentStage.SEMI_FINAL)
    assert [(f.home_team_name, f.away_team_name) for f in semi_finals] == [("TBD", "TBD")] * 2
    assert [f.next_fixture_id for f in quarter_finals] == [
        semi_finals[0].id, semi_finals[0].id, semi_finals[1].id, semi_finals[1].id,
    ]
    assert tournament.bracket.rounds == [[f.id for f in quarter_finals], [f.id for f in semi_finals], [fixtures[-1].id]]
    assert tournament.bracket.final_match == fixtures[-1].id
    assert fixtures[-1].next_fixture_id is None


def test_custom_seeds(team_store):
    teams = _register_teams(team_store, 4)
    store = KnockoutTournamentStore(team_store)
    store.start_knockout_tournament_creation("Cup")
    store.update_knockout_creation_draft(team_count=4, seeding_strategy="seeded")
    for team in teams:
        store.add_team_to_knockout_draft(team.id)
    store.set_seed_position(teams[3].id, 1)
    store.set_seed_position(teams[0].id, 4)

    tournament_id = store.create_knockout_tournament()

    first = store.get_knockout_fixtures(tournament_id)[0]
    assert (first.home_team_name, first.away_team_name) == ("T4", "T1")


def test_random_bracket_enters_every_team(team_store):
    store, tournament_id = _knockout(team_store, 4, strategy=SeedingStrategy.RANDOM)

    first_round = store.get_fixtures_by_stage(tournament_id, TournamentStage.SEMI_FINAL)
    names = sorted(name for f in first_round for name in (f.home_team_name, f.away_team_name))
    assert names == ["T1", "T2", "T3", "T4"]


def test_create_rejects_invalid_drafts(team_store):
    """Test team count, selection size and unknown teams; the draft survives each rejection"""
    teams = _register_teams(team_store, 4)
    store = KnockoutTournamentStore(team_store)
    store.start_knockout_tournament_creation("Cup")
    for team in teams[:3]:
        store.add_team_to_knockout_draft(team.id)

    store.update_knockout_creation_draft(team_count=6)
    assert store.create_knockout_tournament() is None

    store.update_knockout_creation_draft(team_count=4)
    assert store.create_knockout_tournament() is None

    store.add_team_to_knockout_draft("ghost")
    assert store.create_knockout_tournament() is None

    assert store.tournaments == []
    assert store.creation_draft["name"] == "Cup"


def test_draft_team_selection(team_store):
    store = KnockoutTournamentStore(team_store)
    store.start_knockout_tournament_creation("Cup")
    store.add_team_to_knockout_draft("t1")
    store.add_team_to_knockout_draft("t1")
    store.add_team_to_knockout_draft("t2")
    store.set_seed_position("t1", 2)

    store.remove_team_from_knockout_draft("t1")

    assert store.creation_draft["selected_team_ids"] == ["t2"]
    assert store.creation_draft["custom_seeding"] == {}

    store.cancel_knockout_tournament_creation()
    assert store.creation_draft == store.draft.default()


def test_successful_create_resets_draft(team_store):
    store, tournament_id = _knockout(team_store, 2)

    assert tournament_id is not None
    assert store.creation_draft["name"] == ""
    assert store.creation_draft["selected_team_ids"] == []


# --- Match flow ---

def test_final_with_own_goal_and_extra_time(team_store):
    """Test that a level final needs extra time and its winner takes the tournament"""
    store, tournament_id = _knockout(team_store, 2)
    store.start_knockout_tournament(tournament_id)
    final = store.get_knockout_fixtures(tournament_id)[0]

    sides = store.initialize_knockout_match(tournament_id, final.id)
    assert sides["home_team_name"] == "T1"
    store.start_knockout_match_scoring()
    store.add_knockout_match_event(_goal(final.home_team_id, 30))
    store.add_knockout_match_event(_goal(final.home_team_id, 12, sub_type="own_goal"))

    match = store.active_knockout_match
    assert (match.home_score, match.away_score) == (1, 1)
    assert [e.minute for e in match.events] == [12, 30]

    assert store.end_knockout_match() is None
    assert store.active_knockout_match is not None

    assert store.start_extra_time() is True
    store.add_knockout_match_event(_goal(final.away_team_id, 104))
    match = store.active_knockout_match
    assert (match.extra_time_score.home_score, match.extra_time_score.away_score) == (0, 1)

    completed = store.end_knockout_match()

    assert completed.status is FixtureStatus.COMPLETED
    assert (completed.home_score, completed.away_score) == (1, 2)
    assert completed.winner == final.away_team_id
    assert store.active_knockout_match is None
    tournament = store.get_knockout_tournament(tournament_id)
    assert tournament.status is TournamentStatus.COMPLETED
    assert tournament.winner == "T2"
    assert store.get_team_status(tournament_id, final.away_team_id).status is KnockoutTeamStatus.WINNER
    loser = store.get_team_status(tournament_id, final.home_team_id)
    assert loser.status is KnockoutTeamStatus.ELIMINATED
    assert (loser.matches_played, loser.goals_for, loser.goals_against) == (1, 1, 2)


def test_shootout_winner_advances(team_store):
    """Test that a shootout decides a level semi-final and fills the final's home slot"""
    store, tournament_id = _knockout(team_store, 4)
    semi, other_semi, final = store.get_knockout_fixtures(tournament_id)

    assert store.initialize_knockout_match(tournament_id, final.id) is None

    store.initialize_knockout_match(tournament_id, semi.id)
    store.start_knockout_match_scoring()
    assert store.start_penalty_shootout() is True
    store.add_penalty_goal(semi.home_team_id)
    store.add_penalty_goal(semi.home_team_id)
    store.add_penalty_goal(semi.away_team_id)

    completed = store.end_knockout_match()

    assert completed.penalty_shootout.is_completed is True
    assert completed.winner_name == "T1"
    final = store.get_knockout_fixture(tournament_id, final.id)
    assert (final.home_team_name, final.away_team_name) == ("T1", "TBD")
    assert [f.id for f in store.get_completed_knockout_fixtures(tournament_id)] == [semi.id]
    assert [f.id for f in store.get_upcoming_knockout_fixtures(tournament_id)] == [other_semi.id, final.id]
    tournament = store.get_knockout_tournament(tournament_id)
    assert tournament.status is not TournamentStatus.COMPLETED
    assert tournament.current_stage is TournamentStage.SEMI_FINAL
    assert store.get_team_status(tournament_id, semi.away_team_id).status is KnockoutTeamStatus.ELIMINATED


def test_settings_gate_extra_time_and_shootout(team_store):
    teams = _register_teams(team_store, 2)
    store = KnockoutTournamentStore(team_store)
    store.start_knockout_tournament_creation("Cup")
    store.update_knockout_creation_draft(team_count=2)
    store.set_knockout_tournament_settings(KnockoutSettings(allow_extra_time=False, allow_penalty_shootout=False))
    for team in teams:
        store.add_team_to_knockout_draft(team.id)
    tournament_id = store.create_knockout_tournament()
    final = store.get_knockout_fixtures(tournament_id)[0]

    store.initialize_knockout_match(tournament_id, final.id)

    assert store.start_extra_time() is False
    assert store.start_penalty_shootout() is False


def test_events_for_other_teams_are_ignored(team_store):
    store, tournament_id = _knockout(team_store, 2)
    final = store.get_knockout_fixtures(tournament_id)[0]
    store.initialize_knockout_match(tournament_id, final.id)

    assert store.add_knockout_match_event(_goal("stranger", 5)) is None
    assert store.active_knockout_match.home_score == 0

    store.cancel_knockout_match()
    assert store.active_knockout_match is None
    assert store.add_knockout_match_event(_goal(final.home_team_id, 5)) is None


def test_tournaments_survive_restart(team_store, storage):
    """Test that tournaments, fixtures and results are hydrated by a new store"""
    store, tournament_id = _knockout(team_store, 4, storage=storage)
    semi = store.get_knockout_fixtures(tournament_id)[0]
    store.initialize_knockout_match(tournament_id, semi.id)
    store.add_knockout_match_event(_goal(semi.home_team_id, 50))
    store.end_knockout_match()

    restarted = KnockoutTournamentStore(team_store, storage)

    assert restarted.tournaments == store.tournaments
    assert restarted.get_knockout_fixture(tournament_id, semi.id).winner == semi.home_team_id
    assert restarted.active_knockout_match is None


def test_delete_and_clear_tournaments(team_store):
    store, tournament_id = _knockout(team_store, 2)
    final = store.get_knockout_fixtures(tournament_id)[0]
    store.initialize_knockout_match(tournament_id, final.id)

    assert store.delete_knockout_tournament(tournament_id) is True
    assert store.active_knockout_match is None
    assert store.get_knockout_fixtures(tournament_id) == []

    store.clear_all_knockout_tournaments()
    assert store.tournaments == []
