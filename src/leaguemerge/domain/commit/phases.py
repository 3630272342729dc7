"""Commit phases, one per entity type, run in dependency order.

Every phase either reuses an entity already stored for the season or creates
exactly one new one, and records the identifier it settled on in the
``CommitContext`` so later phases can wire references through it.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from leaguemerge.domain.keys import FixtureKey, PlayerKey, TeamKey
from leaguemerge.domain.matching import COMMIT_RULES, DEFAULT_THRESHOLDS, NameParts, names_match
from leaguemerge.domain.model import Division, Fixture, FrameWinner, Player, Team

if TYPE_CHECKING:
    from datetime import date
    from uuid import UUID

    from leaguemerge.domain.aggregation.graph import PlayerFrameRecord, PreviewGraph
    from leaguemerge.domain.commit.context import CommitContext
    from leaguemerge.domain.matching import MatchThresholds


log = getLogger(__name__)


class CommitPhase(Protocol):
    """Contract implemented by each commit phase."""

    name: str
    label: str

    def run(self, graph: PreviewGraph, *, context: CommitContext) -> None: ...


@dataclass(slots=True)
class DivisionPhase:
    name: str = "divisions"
    label: str = "Committing divisions"

    def run(self, graph: PreviewGraph, *, context: CommitContext) -> None:
        repository = context.repositories.divisions
        counts = context.result.divisions
        by_name = {
            division.name.lower(): division
            for division in repository.list_for_season(context.season_id)
        }

        for key, preview in graph.divisions.items():
            division = by_name.get(preview.name.lower())
            if division is not None:
                counts.skipped += 1
            else:
                division = Division(name=preview.name, season_id=context.season_id)
                repository.add(division)
                by_name[division.name.lower()] = division
                counts.created += 1
            context.division_ids[key] = division.id


@dataclass(slots=True)
class TeamPhase:
    name: str = "teams"
    label: str = "Committing teams"

    def run(self, graph: PreviewGraph, *, context: CommitContext) -> None:
        repository = context.repositories.teams
        counts = context.result.teams
        by_key = {
            TeamKey.from_name(team.name): team
            for team in repository.list_for_season(context.season_id)
        }

        for key, preview in graph.teams.items():
            team = by_key.get(key)
            if team is not None:
                counts.skipped += 1
            else:
                team = Team(
                    name=preview.name,
                    division_id=context.division_id(preview.division_name),
                    season_id=context.season_id,
                )
                repository.add(team)
                by_key[key] = team
                counts.created += 1
            context.team_ids[key] = team.id
            context.team_divisions[team.id] = team.division_id


@dataclass(slots=True)
class PlayerPhase:
    """Resolve aggregated players against the season's stored players.

    Exact key hits are checked against every stored player, including ones
    created earlier in this run. Fuzzy matching uses ``COMMIT_RULES`` and only
    considers players that were stored before the run started, so two players
    the aggregator deliberately kept apart are not collapsed here.
    """

    thresholds: MatchThresholds = DEFAULT_THRESHOLDS
    name: str = "players"
    label: str = "Committing players"

    def run(self, graph: PreviewGraph, *, context: CommitContext) -> None:
        repository = context.repositories.players
        counts = context.result.players
        stored = repository.list_for_season(context.season_id)
        by_key = {PlayerKey.from_parts(p.first_name, p.last_name): p for p in stored}
        candidates = [(NameParts.for_key(p.first_name, p.last_name), p) for p in stored]

        for key, preview in graph.players.items():
            player = by_key.get(key) or self._fuzzy_match(preview.name_parts, candidates)
            if player is not None:
                counts.skipped += 1
            else:
                player = Player(
                    first_name=preview.first_name,
                    last_name=preview.last_name,
                    team_id=context.team_id(preview.team_name),
                    season_id=context.season_id,
                )
                repository.add(player)
                by_key[key] = player
                counts.created += 1
            context.player_ids[key] = player.id

    def _fuzzy_match(
        self, parts: NameParts, candidates: list[tuple[NameParts, Player]]
    ) -> Player | None:
        for candidate_parts, player in candidates:
            if names_match(parts, candidate_parts, rules=COMMIT_RULES, thresholds=self.thresholds):
                log.debug("Matched %s %s to stored player %s", parts.first, parts.last, player.id)
                return player
        return None


@dataclass(slots=True)
class FixturePhase:
    name: str = "fixtures"
    label: str = "Committing fixtures"

    def run(self, graph: PreviewGraph, *, context: CommitContext) -> None:
        counts = context.result.fixtures
        context.known_fixtures.extend(
            context.repositories.fixtures.list_for_season(context.season_id)
        )

        for key, result in graph.results.items():
            home_id = context.team_ids.get(key.home)
            away_id = context.team_ids.get(key.away)
            if home_id is None or away_id is None:
                log.debug("Skipping result %s: unresolved team", key)
                counts.skipped += 1
                continue

            fixture = _find_fixture(context, key.played_on, home_id, away_id)
            if fixture is not None:
                if fixture.id not in context.counted_fixtures:
                    counts.skipped += 1
                    context.counted_fixtures.add(fixture.id)
            else:
                fixture = _create_fixture(
                    context,
                    played_on=key.played_on,
                    home_team_id=home_id,
                    away_team_id=away_id,
                    division_id=context.division_id(result.division)
                    or context.team_divisions.get(home_id),
                )
            context.fixtures[key] = fixture


@dataclass(slots=True)
class FramePhase:
    """Attach each aggregated frame to its fixture, oriented by the fixture's home side."""

    name: str = "frames"
    label: str = "Committing frames"

    def run(self, graph: PreviewGraph, *, context: CommitContext) -> None:
        counts = context.result.frames

        for record in graph.frames.values():
            player_id = context.player_ids.get(record.player_key)
            opponent_id = context.player_ids.get(record.opponent_key)
            player_team_id = context.team_id(record.player_team)
            opponent_team_id = context.team_id(record.opponent_team)
            if (
                player_id is None
                or opponent_id is None
                or player_team_id is None
                or opponent_team_id is None
            ):
                log.debug("Skipping frame %s: unresolved player or team", record.key)
                counts.skipped += 1
                continue

            fixture = self._locate_fixture(record, context, player_team_id, opponent_team_id)
            player_is_home = fixture.home_team_id == player_team_id
            if player_is_home:
                home_player_id, away_player_id = player_id, opponent_id
            else:
                home_player_id, away_player_id = opponent_id, player_id

            if fixture.has_frame_between(home_player_id, away_player_id):
                counts.skipped += 1
                continue

            rating = record.rating_attained
            winner = FrameWinner.HOME if record.player_won == player_is_home else FrameWinner.AWAY
            fixture.add_frame(
                home_player_id=home_player_id,
                away_player_id=away_player_id,
                winner=winner,
                home_player_rating=rating if player_is_home else None,
                away_player_rating=None if player_is_home else rating,
            )
            counts.created += 1

    def _locate_fixture(
        self,
        record: PlayerFrameRecord,
        context: CommitContext,
        player_team_id: UUID,
        opponent_team_id: UUID,
    ) -> Fixture:
        forward = FixtureKey(
            record.played_on,
            TeamKey.from_name(record.player_team),
            TeamKey.from_name(record.opponent_team),
        )
        fixture = context.fixtures.get(forward) or context.fixtures.get(forward.reversed())
        if fixture is not None:
            return fixture

        fixture = _find_fixture(context, record.played_on, player_team_id, opponent_team_id)
        if fixture is None:
            fixture = _find_fixture(context, record.played_on, opponent_team_id, player_team_id)
        if fixture is not None:
            if fixture.id not in context.counted_fixtures:
                context.result.fixtures.skipped += 1
                context.counted_fixtures.add(fixture.id)
        else:
            fixture = _create_fixture(
                context,
                played_on=record.played_on,
                home_team_id=player_team_id,
                away_team_id=opponent_team_id,
                division_id=context.team_divisions.get(player_team_id),
            )
        context.fixtures[forward] = fixture
        return fixture


def _find_fixture(
    context: CommitContext, played_on: date, home_team_id: UUID, away_team_id: UUID
) -> Fixture | None:
    for fixture in context.known_fixtures:
        if fixture.date == played_on and fixture.is_between(home_team_id, away_team_id):
            return fixture
    return None


def _create_fixture(
    context: CommitContext,
    *,
    played_on: date,
    home_team_id: UUID,
    away_team_id: UUID,
    division_id: UUID | None,
) -> Fixture:
    fixture = Fixture(
        date=played_on,
        home_team_id=home_team_id,
        away_team_id=away_team_id,
        division_id=division_id,
        season_id=context.season_id,
    )
    context.repositories.fixtures.add(fixture)
    context.known_fixtures.append(fixture)
    context.counted_fixtures.add(fixture.id)
    context.result.fixtures.created += 1
    return fixture
