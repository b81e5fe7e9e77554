import sys
import argparse
import asyncio
from typing import Any, List, Optional

from unihockey_feed.logging.setup import setup_logging
from unihockey_feed.config.settings import settings

setup_logging()

from loguru import logger

from unihockey_feed.models.event import GameEvent
from unihockey_feed.models.game import GameDetail, GameSummary
from unihockey_feed.models.ranking import RankingLookup
from unihockey_feed.models.team import RosterPlayer
from unihockey_feed.normalization.normalizer import Normalizer
from unihockey_feed.services.league_resolver import TeamLeagueDirectory

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


def _score(game: GameSummary) -> str:
    if game.home_score is None:
        return "-:-"
    return f"{game.home_score}:{game.away_score}"


def render_games(games: List[GameSummary], title: str) -> None:
    if not games:
        console.print(Panel("No games found.", title=title))
        return
    table = Table(title=title)
    for column in ("Date", "Time", "League", "Home", "Score", "Away", "Status"):
        table.add_column(column)
    for game in games:
        status = game.status.value
        if game.live_clock or game.period:
            status = f"{status} {game.period or ''} {game.live_clock or ''}".strip()
        table.add_row(
            game.game_date,
            game.start_time,
            game.league.name,
            game.home_team.name,
            _score(game),
            game.away_team.name,
            status,
        )
    console.print(table)


def render_detail(detail: Optional[GameDetail]) -> None:
    if detail is None:
        console.print(Panel("Game not found.", title="Game"))
        return
    lines = [
        f"[bold]{detail.home_team.name}[/bold] {_score(detail)} [bold]{detail.away_team.name}[/bold]",
        f"{detail.game_date} {detail.start_time} ({detail.status.value})",
        f"League: {detail.league.name} (id={detail.league.id or '-'}, class={detail.league.game_class or '-'})",
    ]
    if detail.venue:
        lines.append(f"Venue: {detail.venue.name}")
    if detail.referees:
        lines.append(f"Referees: {', '.join(detail.referees)}")
    if detail.spectators is not None:
        lines.append(f"Spectators: {detail.spectators}")
    console.print(Panel("\n".join(lines), title=f"Game {detail.id}"))


def render_events(events: List[GameEvent]) -> None:
    table = Table(title="Game events")
    for column in ("Time", "Side", "Type", "Description", "Player", "Assist"):
        table.add_column(column)
    for event in events:
        table.add_row(
            event.time,
            event.team_side.value,
            event.event_type.value,
            event.description,
            event.player,
            event.assist or "",
        )
    console.print(table)


def render_rankings(lookup: Optional[RankingLookup]) -> None:
    if lookup is None:
        console.print(Panel("Rankings unavailable.", title="Rankings"))
        return
    if lookup.table is None:
        body = "\n".join(
            f"- {c.full_name or c.league_name} (league={c.league_id}, class={c.game_class}, group={c.group})"
            for c in lookup.candidates
        )
        console.print(Panel(f"{lookup.message}\n{body}", title="Rankings"))
        return
    table = Table(title=f"{lookup.table.league_name} {lookup.table.season}")
    for column in ("#", "Team", "GP", "W", "D", "L", "Goals", "Diff", "Pts"):
        table.add_column(column)
    for row in lookup.table.rows:
        table.add_row(
            str(row.position),
            row.team_name,
            str(row.games),
            str(row.wins),
            str(row.draws),
            str(row.losses),
            f"{row.goals_for}:{row.goals_against}",
            str(row.goal_difference),
            str(row.points),
        )
    console.print(table)


def render_roster(players: List[RosterPlayer]) -> None:
    table = Table(title="Roster")
    for column in ("#", "Name", "Position", "Born", "G", "A", "Pts"):
        table.add_column(column)
    for player in players:
        table.add_row(
            player.number or "",
            player.name,
            player.position or "",
            str(player.year_of_birth or ""),
            str(player.goals if player.goals is not None else ""),
            str(player.assists if player.assists is not None else ""),
            str(player.points if player.points is not None else ""),
        )
    console.print(table)


def render_records(records: Any, title: str) -> None:
    if not records:
        console.print(Panel("Nothing found.", title=title))
        return
    if not isinstance(records, list):
        records = [records]
    for record in records:
        console.print(Panel(record.model_dump_json(indent=2), title=title))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Swiss Unihockey results feed")
    parser.add_argument("--leagues-file", help="Entity registry JSON used to resolve game leagues")
    commands = parser.add_subparsers(dest="command", required=True)

    games = commands.add_parser("games", help="Games on a given day")
    games.add_argument("--date", help="YYYY-MM-DD (default: today)")
    games.add_argument("--league")
    games.add_argument("--game-class", type=int)
    games.add_argument("--group")

    commands.add_parser("live", help="Current and live games")

    for name, help_text in (("game", "Game detail"), ("events", "Game events"), ("h2h", "Head-to-head")):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("game_id")

    rankings = commands.add_parser("rankings", help="League standings")
    rankings.add_argument("--season")
    rankings.add_argument("--league")
    rankings.add_argument("--game-class", type=int)
    rankings.add_argument("--group")
    rankings.add_argument("--league-name")
    rankings.add_argument("--team", action="append", dest="team_names")

    team_games = commands.add_parser("team-games", help="Full team schedule")
    team_games.add_argument("team_id")
    team_games.add_argument("--season")

    roster = commands.add_parser("roster", help="Team profile, roster, season history and competitions")
    roster.add_argument("team_id")

    player = commands.add_parser("player", help="Player profile, statistics and game log")
    player.add_argument("player_id")
    return parser


async def run(args: argparse.Namespace) -> None:
    resolver = TeamLeagueDirectory.from_json_file(args.leagues_file) if args.leagues_file else None
    async with Normalizer(league_resolver=resolver) as normalizer:
        if args.command == "games":
            games = await normalizer.get_games(args.date, args.league, args.game_class, args.group)
            render_games(games, f"Games {args.date or 'today'}")
        elif args.command == "live":
            render_games(await normalizer.get_current_games(), "Current games")
        elif args.command == "game":
            render_detail(await normalizer.get_game_details(args.game_id))
        elif args.command == "events":
            render_events(await normalizer.get_game_events(args.game_id))
        elif args.command == "h2h":
            render_games(await normalizer.get_head_to_head(args.game_id), "Head-to-head")
        elif args.command == "rankings":
            lookup = await normalizer.get_rankings(
                season=args.season,
                league=args.league,
                game_class=args.game_class,
                group=args.group,
                league_name=args.league_name,
                team_names=args.team_names,
            )
            render_rankings(lookup)
        elif args.command == "team-games":
            render_games(await normalizer.get_team_games(args.team_id, args.season), f"Team {args.team_id}")
        elif args.command == "roster":
            team, players, history, competitions = await asyncio.gather(
                normalizer.get_team(args.team_id),
                normalizer.get_team_players(args.team_id),
                normalizer.get_team_statistics(args.team_id),
                normalizer.get_team_competitions(args.team_id),
            )
            render_records(team, "Team")
            render_roster(players)
            render_records(history, "Season history")
            render_records(competitions, "Competitions")
        elif args.command == "player":
            profile, stats, overview = await asyncio.gather(
                normalizer.get_player(args.player_id),
                normalizer.get_player_statistics(args.player_id),
                normalizer.get_player_overview(args.player_id),
            )
            render_records(profile, "Player")
            render_records(stats, "Season statistics")
            render_records(overview, "Game log")


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logger.info(f"Running '{args.command}' against {settings.api_base_url}")
    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
