"""
Football players and teams.

Teams reference their members by player id only; full player records are
resolved from the player collection on read.
"""
from typing import Any, Dict, Iterable, List, Optional

from courtside.config.logging_config import get_logger
from courtside.data.models import FootballPlayer, FootballPosition, FootballTeam, TeamStatus
from courtside.domain.base_store import DomainStore

logger = get_logger(__name__)


class FootballTeamStore(DomainStore):
    """Registered players, the teams built from them, and the team being edited.

    Membership actions that cannot apply (unknown team or player, duplicate
    member, full team) change nothing and leave a message in ``error``.
    """

    name = "football"

    def __init__(self, players: Iterable[FootballPlayer] = ()):
        super().__init__()
        self._players = self._repository("players", id_prefix="player")
        self._teams = self._repository("teams", id_prefix="team", entity_cls=FootballTeam)
        self.current_team_id: Optional[str] = None
        self.error: Optional[str] = None
        self._players.set_all(players)

    # --- Players ---

    @property
    def players(self) -> List[FootballPlayer]:
        return self._players.list()

    def set_players(self, players: Iterable[FootballPlayer]) -> None:
        self._players.set_all(players)
        self.error = None

    def add_player(self, player: FootballPlayer) -> FootballPlayer:
        return self._players.add(player)

    def update_player(self, player_id: str, **changes: Any) -> Optional[FootballPlayer]:
        return self._players.update(player_id, changes)

    def delete_player(self, player_id: str) -> bool:
        """Remove a player and take them off every team roster."""
        if not self._players.delete(player_id):
            return False
        for team in self._teams.query(lambda t: player_id in t.member_player_ids):
            self._teams.update(team.id, {
                "member_player_ids": [pid for pid in team.member_player_ids if pid != player_id],
            })
        return True

    def get_player_by_id(self, player_id: str) -> Optional[FootballPlayer]:
        return self._players.get_by_id(player_id)

    def get_players_by_position(self, position: FootballPosition) -> List[FootballPlayer]:
        return self._players.query(position=position)

    def get_all_players(self) -> List[FootballPlayer]:
        return self._players.list()

    def get_player_stats(self) -> Dict[str, Any]:
        players = self._players.list()
        by_position = {position.value: 0 for position in FootballPosition}
        for player in players:
            by_position[player.position.value] += 1
        return {
            "total_players": len(players),
            "players_by_position": by_position,
            "registered_players": sum(1 for p in players if p.is_registered),
            "players_with_images": sum(1 for p in players if p.images),
        }

    # --- Teams ---

    @property
    def teams(self) -> List[FootballTeam]:
        return self._teams.list()

    @property
    def current_team(self) -> Optional[FootballTeam]:
        return None if self.current_team_id is None else self._teams.get_by_id(self.current_team_id)

    def add_team(self, team: FootballTeam) -> FootballTeam:
        """
        Create a team and make it the current one.

        Args:
            team: Team input; id, timestamps, status and match counters are reset

        Returns:
            FootballTeam: The stored team
        """
        values = team.field_values()
        values.update(id="", created_at="", updated_at="", status=TeamStatus.ACTIVE,
                      matches_played=0, matches_won=0, matches_lost=0, matches_drawn=0)
        stored = self._teams.create(**values)
        self.current_team_id = stored.id
        self.error = None
        logger.info(f"Team {stored.team_name!r} created with id {stored.id}")
        return stored

    def update_team(self, team_id: str, **changes: Any) -> Optional[FootballTeam]:
        return self._teams.update(team_id, changes)

    def delete_team(self, team_id: str) -> bool:
        if self.current_team_id == team_id:
            self.current_team_id = None
        return self._teams.delete(team_id)

    def get_team_by_id(self, team_id: str) -> Optional[FootballTeam]:
        return self._teams.get_by_id(team_id)

    def set_current_team(self, team_id: Optional[str]) -> None:
        self.current_team_id = team_id
        self._notify()

    def get_teams_by_city(self, city: str) -> List[FootballTeam]:
        return self._teams.query(lambda t: t.city.lower() == city.lower())

    def get_team_stats(self) -> Dict[str, Any]:
        teams = self._teams.list()
        total_players = sum(len(t.member_player_ids) for t in teams)
        return {
            "total_teams": len(teams),
            "active_teams": sum(1 for t in teams if t.status is TeamStatus.ACTIVE),
            "total_players": total_players,
            "average_team_size": total_players / len(teams) if teams else 0.0,
        }

    def search_teams(self, query: str) -> List[FootballTeam]:
        """Teams whose name, city or any member's name contains the query."""
        term = query.strip().lower()

        def matches(team: FootballTeam) -> bool:
            if term in team.team_name.lower() or term in team.city.lower():
                return True
            return any(term in player.name.lower() for player in self.get_team_players(team.id))

        return self._teams.query(matches)

    # --- Membership ---

    def add_player_to_team(self, team_id: str, player_id: str) -> Optional[FootballTeam]:
        team = self._teams.get_by_id(team_id)
        if self._players.get_by_id(player_id) is None:
            return self._fail("Player not found")
        if team is None:
            return self._fail("Team not found")
        if player_id in team.member_player_ids:
            return self._fail("Player is already in this team")
        if len(team.member_player_ids) >= team.max_players:
            return self._fail("Team is at maximum capacity")

        self.error = None
        return self._teams.update(team_id, {"member_player_ids": [*team.member_player_ids, player_id]})

    def remove_player_from_team(self, team_id: str, player_id: str) -> Optional[FootballTeam]:
        team = self._teams.get_by_id(team_id)
        if team is None:
            return None
        self.error = None
        return self._teams.update(
            team_id, {"member_player_ids": [pid for pid in team.member_player_ids if pid != player_id]}
        )

    def get_team_players(self, team_id: str) -> List[FootballPlayer]:
        """Member records in roster order; ids without a player record are skipped."""
        team = self._teams.get_by_id(team_id)
        if team is None:
            return []
        players = (self._players.get_by_id(pid) for pid in team.member_player_ids)
        return [player for player in players if player is not None]

    def get_available_players_for_team(self, team_id: str) -> List[FootballPlayer]:
        """Players not on the team; every player when the team is unknown."""
        team = self._teams.get_by_id(team_id)
        if team is None:
            return self._players.list()
        return self._players.query(lambda p: p.id not in team.member_player_ids)

    def is_player_in_team(self, team_id: str, player_id: str) -> bool:
        team = self._teams.get_by_id(team_id)
        return team is not None and player_id in team.member_player_ids

    def clear_error(self) -> None:
        self.error = None

    def _fail(self, message: str) -> None:
        logger.warning(f"Team membership change rejected: {message}")
        self.error = message
        self._notify()
        return None
