"""
Knockout tournaments: creation draft, seeded bracket generation and scoring
of one tie at a time.

A bracket for N teams (N a power of two, 2 to 32) has log2(N) rounds. Every
fixture except the final knows the fixture its winner advances to; later
rounds start with both sides TBD and are filled in as results come in.
Tournaments persist across restarts; the draft and the tie being scored do
not.
"""
import copy
import random
from dataclasses import replace
from typing import Any, Dict, List, Optional

from courtside.config.logging_config import get_logger
from courtside.data.draft import DraftStaging
from courtside.data.models import (
    ActiveKnockoutMatch,
    FixtureStatus,
    KnockoutBracket,
    KnockoutFixture,
    KnockoutSettings,
    KnockoutTeamStatus,
    KnockoutTournament,
    KnockoutTournamentTeam,
    MatchEvent,
    MatchEventType,
    MatchStatus,
    PenaltyShootout,
    Score,
    SeedingStrategy,
    TournamentStage,
    TournamentStatus,
)
from courtside.data.persistence import KeyValueStorage
from courtside.domain.base_store import PersistentStore
from courtside.domain.football_team_store import FootballTeamStore
from courtside.utils.identifiers import generate_id, utc_timestamp

logger = get_logger(__name__)

MAX_TEAMS = 32

STAGES_BY_TEAM_COUNT = {
    2: TournamentStage.FINAL,
    4: TournamentStage.SEMI_FINAL,
    8: TournamentStage.QUARTER_FINAL,
    16: TournamentStage.ROUND_OF_16,
    32: TournamentStage.ROUND_OF_32,
}


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def stage_for_round(round_number: int, total_rounds: int) -> TournamentStage:
    """Stage name of a round, from the number of teams still in it."""
    return STAGES_BY_TEAM_COUNT[2 ** (total_rounds - round_number + 1)]


def seed_order(size: int) -> List[int]:
    """
    Bracket slots for seeds 1..size, so that adjacent slots meet in round one.

    Seed 1 meets the lowest seed, and seeds 1 and 2 can only meet in the
    final. For 8 teams: [1, 8, 4, 5, 2, 7, 3, 6].
    """
    order = [1]
    while len(order) < size:
        span = len(order) * 2 + 1
        order = [slot for seed in order for slot in (seed, span - seed)]
    return order


def generate_knockout_fixtures(
    teams: List[KnockoutTournamentTeam],
    total_rounds: int,
    venue: Optional[str] = None,
) -> List[KnockoutFixture]:
    """
    Build every fixture of a bracket.

    Round one pairs the teams in list order (first with second, third with
    fourth...). Fixture ``i`` of a round feeds fixture ``i // 2`` of the next
    round. Match numbers run across the whole bracket.

    Args:
        teams: Entrants in bracket order; the count must be 2 ** total_rounds
        total_rounds: Number of rounds
        venue: Venue stamped on every fixture

    Returns:
        List[KnockoutFixture]: Fixtures ordered by round, then bracket position
    """
    rounds: List[List[KnockoutFixture]] = []
    match_number = 1
    for round_number in range(1, total_rounds + 1):
        stage = stage_for_round(round_number, total_rounds)
        size = 2 ** (total_rounds - round_number)
        fixtures = []
        for position in range(size):
            fixture = KnockoutFixture(
                id=generate_id("fixture"),
                stage=stage,
                match_number=match_number,
                round_number=round_number,
                venue=venue or None,
            )
            if round_number == 1:
                home, away = teams[2 * position], teams[2 * position + 1]
                fixture = replace(
                    fixture,
                    home_team_id=home.id,
                    home_team_name=home.team_name,
                    away_team_id=away.id,
                    away_team_name=away.team_name,
                )
            fixtures.append(fixture)
            match_number += 1
        rounds.append(fixtures)

    for current, following in zip(rounds, rounds[1:]):
        for position, fixture in enumerate(current):
            current[position] = replace(fixture, next_fixture_id=following[position // 2].id)

    return [fixture for fixtures in rounds for fixture in fixtures]


def decide_winner(match: ActiveKnockoutMatch) -> Optional[str]:
    """
    Team id that goes through, or None while the tie is level.

    The score after extra time decides first; a level score goes to the
    penalty shootout, if one was taken.
    """
    if match.home_score != match.away_score:
        return match.home_team_id if match.home_score > match.away_score else match.away_team_id
    shootout = match.penalty_shootout
    if shootout is not None and shootout.home_shootout_score != shootout.away_shootout_score:
        if shootout.home_shootout_score > shootout.away_shootout_score:
            return match.home_team_id
        return match.away_team_id
    return None


def default_knockout_draft() -> Dict[str, Any]:
    return {
        "name": "",
        "description": None,
        "team_count": 8,
        "settings": KnockoutSettings().to_dict(),
        "selected_team_ids": [],
        "seeding_strategy": SeedingStrategy.RANDOM.value,
        "custom_seeding": {},  # football team id -> seed
    }


class KnockoutTournamentStore(PersistentStore):
    """Knockout tournaments built from the teams of a ``FootballTeamStore``."""

    name = "knockout_tournaments"
    storage_key = "knockout-tournament-storage"
    collection_field = "tournaments"

    def __init__(
        self,
        team_store: FootballTeamStore,
        storage: Optional[KeyValueStorage] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the store.

        Args:
            team_store: Source of the teams entered into a tournament
            storage: Key-value storage for tournaments; in memory when None
            rng: Random source for unseeded brackets
        """
        super().__init__(storage)
        self.team_store = team_store
        self.rng = rng or random.Random()
        self.draft = DraftStaging("knockout_tournament", default_knockout_draft)
        self._tournaments = self._repository("tournaments", id_prefix="knockout")
        self._attach_persistence(self._tournaments, KnockoutTournament)
        self._active_match: Optional[ActiveKnockoutMatch] = None

    @property
    def tournaments(self) -> List[KnockoutTournament]:
        return self._tournaments.list()

    # ---------- creation draft ----------

    @property
    def creation_draft(self) -> Dict[str, Any]:
        return self.draft.value

    def start_knockout_tournament_creation(self, name: str) -> None:
        self.draft.reset()
        self.draft.update(name=name)
        self._notify()

    def update_knockout_creation_draft(self, **updates: Any) -> None:
        self.draft.update(**updates)
        self._notify()

    def add_team_to_knockout_draft(self, team_id: str) -> None:
        selected = self.draft.value["selected_team_ids"]
        if team_id not in selected:
            self.draft.update(selected_team_ids=[*selected, team_id])
            self._notify()

    def remove_team_from_knockout_draft(self, team_id: str) -> None:
        draft = self.draft.value
        seeding = draft["custom_seeding"]
        seeding.pop(team_id, None)
        self.draft.update(
            selected_team_ids=[tid for tid in draft["selected_team_ids"] if tid != team_id],
            custom_seeding=seeding,
        )
        self._notify()

    def set_seed_position(self, team_id: str, seed_position: int) -> None:
        self.draft.update_field(f"custom_seeding.{team_id}", seed_position)
        self._notify()

    def set_knockout_tournament_settings(self, settings: KnockoutSettings) -> None:
        self.draft.update(settings=settings.to_dict())
        self._notify()

    def cancel_knockout_tournament_creation(self) -> None:
        self.draft.reset()
        self._notify()

    def create_knockout_tournament(self) -> Optional[str]:
        """
        Turn the draft into a tournament with its bracket.

        The first ``team_count`` selected teams are entered. With the seeded
        strategy they are placed by seed (custom seeds, otherwise selection
        order); otherwise the bracket order is shuffled. The draft is reset
        only on success.

        Returns:
            Optional[str]: New tournament id, None if the draft is not valid
        """
        draft = self.draft.value
        team_count = draft["team_count"]
        if not is_power_of_two(team_count) or not 2 <= team_count <= MAX_TEAMS:
            logger.error(f"Team count must be a power of two between 2 and {MAX_TEAMS}, got {team_count}")
            return None
        selected = draft["selected_team_ids"][:team_count]
        if len(selected) < team_count:
            logger.error(f"Not enough teams selected: {len(selected)}/{team_count}")
            return None

        teams = [self.team_store.get_team_by_id(team_id) for team_id in selected]
        missing = [team_id for team_id, team in zip(selected, teams) if team is None]
        if missing:
            logger.error(f"Selected teams not found: {missing}")
            return None

        seeding = draft["custom_seeding"]
        entries = [
            KnockoutTournamentTeam(
                id=generate_id("kteam"),
                team_id=team.id,
                team_name=team.team_name,
                logo_url=team.logo_url,
                seed_position=seeding.get(team.id, index + 1),
            )
            for index, team in enumerate(teams)
        ]
        if draft["seeding_strategy"] == SeedingStrategy.SEEDED.value:
            ranked = sorted(entries, key=lambda entry: entry.seed_position)
            entries = [ranked[seed - 1] for seed in seed_order(team_count)]
        else:
            self.rng.shuffle(entries)

        total_rounds = team_count.bit_length() - 1
        settings = KnockoutSettings.from_dict(draft["settings"])
        tournament = self._tournaments.add(KnockoutTournament(
            name=draft["name"],
            description=draft["description"],
            settings=settings,
            teams=entries,
            current_stage=stage_for_round(1, total_rounds),
            total_teams=team_count,
            total_rounds=total_rounds,
        ))
        self.draft.reset()
        self.generate_knockout_bracket(tournament.id)
        logger.info(f"Knockout tournament {tournament.name!r} created with {team_count} teams")
        return tournament.id

    # ---------- tournament management ----------

    def generate_knockout_bracket(self, tournament_id: str) -> Optional[KnockoutTournament]:
        """(Re)build all fixtures of a tournament from its entrants; earlier results are dropped."""
        tournament = self._tournaments.get_by_id(tournament_id)
        if tournament is None:
            return None
        fixtures = generate_knockout_fixtures(tournament.teams, tournament.total_rounds, tournament.settings.venue)
        rounds = [
            [f.id for f in fixtures if f.round_number == round_number]
            for round_number in range(1, tournament.total_rounds + 1)
        ]
        return self._tournaments.update(tournament_id, {
            "fixtures": fixtures,
            "bracket": KnockoutBracket(rounds=rounds, final_match=fixtures[-1].id if fixtures else None),
            "current_round": 1,
            "current_stage": stage_for_round(1, tournament.total_rounds),
        })

    def start_knockout_tournament(self, tournament_id: str) -> Optional[KnockoutTournament]:
        return self._tournaments.update(tournament_id, {
            "status": TournamentStatus.ACTIVE,
            "start_date": utc_timestamp(),
        })

    def delete_knockout_tournament(self, tournament_id: str) -> bool:
        if self._active_match is not None and self._active_match.tournament_id == tournament_id:
            self._active_match = None
        return self._tournaments.delete(tournament_id)

    def clear_all_knockout_tournaments(self) -> None:
        self._active_match = None
        self._tournaments.clear()

    # ---------- match flow ----------

    @property
    def active_knockout_match(self) -> Optional[ActiveKnockoutMatch]:
        return copy.deepcopy(self._active_match)

    def initialize_knockout_match(self, tournament_id: str, fixture_id: str) -> Optional[Dict[str, str]]:
        """
        Start setting up a tie whose two sides are known.

        Returns:
            Optional[Dict[str, str]]: Team ids and names of both sides, None if
            the fixture is unknown or still waiting for a side
        """
        fixture = self.get_knockout_fixture(tournament_id, fixture_id)
        if fixture is None or not fixture.home_team_id or not fixture.away_team_id:
            return None
        self._active_match = ActiveKnockoutMatch(
            fixture_id=fixture_id,
            tournament_id=tournament_id,
            home_team_id=fixture.home_team_id,
            away_team_id=fixture.away_team_id,
            home_team_name=fixture.home_team_name,
            away_team_name=fixture.away_team_name,
            start_time=utc_timestamp(),
        )
        self._notify()
        return {
            "home_team_id": fixture.home_team_id,
            "away_team_id": fixture.away_team_id,
            "home_team_name": fixture.home_team_name,
            "away_team_name": fixture.away_team_name,
        }

    def set_knockout_match_players(self, home_player_ids: List[str], away_player_ids: List[str]) -> None:
        self._change_match(home_team_players=list(home_player_ids), away_team_players=list(away_player_ids))

    def set_knockout_match_captains(self, home_captain: str, away_captain: str) -> None:
        self._change_match(home_captain=home_captain, away_captain=away_captain)

    def set_knockout_match_referees(self, referees: List[str]) -> None:
        self._change_match(referees=list(referees))

    def start_knockout_match_scoring(self) -> None:
        self._change_match(status=MatchStatus.PLAYING, start_time=utc_timestamp())

    def add_knockout_match_event(self, event: MatchEvent) -> Optional[MatchEvent]:
        """
        Record a match event, keeping events in match-time order.

        Goals count for the scoring side, own goals for the other side. Goals
        scored once extra time has started also count towards the extra-time
        score.
        """
        match = self._active_match
        if match is None:
            return None
        if event.team_id not in (match.home_team_id, match.away_team_id):
            logger.warning(f"Match event for team {event.team_id} not in this tie, ignored")
            return None

        stored = replace(event, id=generate_id("mevent"), timestamp=utc_timestamp())
        changes: Dict[str, Any] = {
            "events": sorted([*match.events, stored], key=lambda e: (e.minute, e.seconds)),
        }
        if stored.event_type is MatchEventType.GOAL:
            scored_by_home = stored.team_id == match.home_team_id
            if stored.event_sub_type == "own_goal":
                scored_by_home = not scored_by_home
            side = "home_score" if scored_by_home else "away_score"
            changes[side] = getattr(match, side) + 1
            if match.extra_time_score is not None:
                extra = match.extra_time_score
                changes["extra_time_score"] = replace(extra, **{side: getattr(extra, side) + 1})
        self._change_match(**changes)
        return stored

    def start_extra_time(self) -> bool:
        """Begin extra time on a level tie, if the tournament allows it."""
        match = self._active_match
        if match is None or match.extra_time_score is not None or match.home_score != match.away_score:
            return False
        if not self._match_settings(match).allow_extra_time:
            return False
        self._change_match(extra_time_score=Score(), current_minute=self._match_settings(match).match_duration)
        return True

    def start_penalty_shootout(self) -> bool:
        """Begin a shootout on a level tie, if the tournament allows it."""
        match = self._active_match
        if match is None or match.penalty_shootout is not None or match.home_score != match.away_score:
            return False
        if not self._match_settings(match).allow_penalty_shootout:
            return False
        self._change_match(penalty_shootout=PenaltyShootout())
        return True

    def add_penalty_goal(self, team_id: str) -> None:
        match = self._active_match
        if match is None or match.penalty_shootout is None:
            return
        shootout = match.penalty_shootout
        if team_id == match.home_team_id:
            shootout = replace(shootout, home_shootout_score=shootout.home_shootout_score + 1)
        elif team_id == match.away_team_id:
            shootout = replace(shootout, away_shootout_score=shootout.away_shootout_score + 1)
        else:
            return
        self._change_match(penalty_shootout=shootout)

    def end_knockout_match(self) -> Optional[KnockoutFixture]:
        """
        Record the result of the active tie and advance its winner.

        A tie that is still level has no result: nothing is recorded and the
        match stays active until extra time or a shootout separates the sides.

        Returns:
            Optional[KnockoutFixture]: The completed fixture, None if nothing was recorded
        """
        match = self._active_match
        if match is None:
            return None
        tournament = self._tournaments.get_by_id(match.tournament_id)
        if tournament is None or not any(f.id == match.fixture_id for f in tournament.fixtures):
            logger.warning(f"Fixture {match.fixture_id} no longer exists, match discarded")
            self._active_match = None
            self._notify()
            return None

        winner_id = decide_winner(match)
        if winner_id is None:
            logger.warning(f"Tie {match.fixture_id} is level, a knockout match needs a winner")
            return None
        loser_id = match.away_team_id if winner_id == match.home_team_id else match.home_team_id
        winner_name = match.home_team_name if winner_id == match.home_team_id else match.away_team_name

        shootout = match.penalty_shootout
        if shootout is not None:
            shootout = replace(shootout, is_completed=True)

        fixtures = list(tournament.fixtures)
        index = next(i for i, f in enumerate(fixtures) if f.id == match.fixture_id)
        completed = replace(
            fixtures[index],
            status=FixtureStatus.COMPLETED,
            home_score=match.home_score,
            away_score=match.away_score,
            extra_time_score=match.extra_time_score,
            penalty_shootout=shootout,
            winner=winner_id,
            winner_name=winner_name,
        )
        fixtures[index] = completed
        self._advance_winner(fixtures, completed, winner_id, winner_name)

        teams = [self._team_after_match(team, match, winner_id, loser_id) for team in tournament.teams]
        changes: Dict[str, Any] = {"fixtures": fixtures, "teams": teams}

        upcoming = [f for f in fixtures if f.status is not FixtureStatus.COMPLETED]
        if upcoming:
            changes["current_stage"] = upcoming[0].stage
            changes["current_round"] = upcoming[0].round_number
        else:
            changes.update(
                status=TournamentStatus.COMPLETED,
                end_date=utc_timestamp(),
                winner=winner_name,
                winner_team_id=winner_id,
                teams=[
                    replace(team, status=KnockoutTeamStatus.WINNER) if team.id == winner_id else team
                    for team in teams
                ],
            )
            logger.info(f"Knockout tournament {tournament.name!r} won by {winner_name}")

        self._active_match = None
        self._tournaments.update(tournament.id, changes)
        return completed

    def cancel_knockout_match(self) -> None:
        self._active_match = None
        self._notify()

    # ---------- queries ----------

    def get_knockout_tournament(self, tournament_id: str) -> Optional[KnockoutTournament]:
        return self._tournaments.get_by_id(tournament_id)

    def get_knockout_fixtures(self, tournament_id: str) -> List[KnockoutFixture]:
        tournament = self._tournaments.get_by_id(tournament_id)
        return [] if tournament is None else list(tournament.fixtures)

    def get_fixtures_by_stage(self, tournament_id: str, stage: TournamentStage) -> List[KnockoutFixture]:
        return [f for f in self.get_knockout_fixtures(tournament_id) if f.stage is stage]

    def get_upcoming_knockout_fixtures(self, tournament_id: str) -> List[KnockoutFixture]:
        return [f for f in self.get_knockout_fixtures(tournament_id) if f.status is FixtureStatus.UPCOMING]

    def get_completed_knockout_fixtures(self, tournament_id: str) -> List[KnockoutFixture]:
        return [f for f in self.get_knockout_fixtures(tournament_id) if f.status is FixtureStatus.COMPLETED]

    def get_knockout_fixture(self, tournament_id: str, fixture_id: str) -> Optional[KnockoutFixture]:
        return next((f for f in self.get_knockout_fixtures(tournament_id) if f.id == fixture_id), None)

    def get_team_status(self, tournament_id: str, team_id: str) -> Optional[KnockoutTournamentTeam]:
        tournament = self._tournaments.get_by_id(tournament_id)
        if tournament is None:
            return None
        return next((team for team in tournament.teams if team.id == team_id), None)

    # ---------- helpers ----------

    def _change_match(self, **changes: Any) -> None:
        if self._active_match is None:
            return
        self._active_match = replace(self._active_match, **changes)
        self._notify()

    def _match_settings(self, match: ActiveKnockoutMatch) -> KnockoutSettings:
        tournament = self._tournaments.get_by_id(match.tournament_id)
        return KnockoutSettings() if tournament is None else tournament.settings

    @staticmethod
    def _advance_winner(
        fixtures: List[KnockoutFixture],
        completed: KnockoutFixture,
        winner_id: str,
        winner_name: str,
    ) -> None:
        if not completed.next_fixture_id:
            return
        same_round = [f for f in fixtures if f.round_number == completed.round_number]
        position = next(i for i, f in enumerate(same_round) if f.id == completed.id)
        index = next(i for i, f in enumerate(fixtures) if f.id == completed.next_fixture_id)
        if position % 2 == 0:
            fixtures[index] = replace(fixtures[index], home_team_id=winner_id, home_team_name=winner_name)
        else:
            fixtures[index] = replace(fixtures[index], away_team_id=winner_id, away_team_name=winner_name)

    @staticmethod
    def _team_after_match(
        team: KnockoutTournamentTeam,
        match: ActiveKnockoutMatch,
        winner_id: str,
        loser_id: str,
    ) -> KnockoutTournamentTeam:
        if team.id == match.home_team_id:
            scored, conceded = match.home_score, match.away_score
        elif team.id == match.away_team_id:
            scored, conceded = match.away_score, match.home_score
        else:
            return team
        return replace(
            team,
            matches_played=team.matches_played + 1,
            goals_for=team.goals_for + scored,
            goals_against=team.goals_against + conceded,
            status=KnockoutTeamStatus.ELIMINATED if team.id == loser_id else KnockoutTeamStatus.ACTIVE,
        )
