# season_elo/run.py
import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from season_elo.config import EloConfig
from season_elo.datasets import DataLoadError, load_season, save_predictions
from season_elo.elo import EloModel, RatingStore
from season_elo.forecast import forecast_frame, predict_team, predict_week
from season_elo.games import GameRecord
from season_elo.records import projected_records, records_table
from season_elo.report import format_predictions, format_ratings, format_records


@dataclass
class Season:
    config: EloConfig
    games: List[GameRecord]
    ratings: Dict[str, float]
    n_completed: int = 0
    weeks_completed: int = 0


def run_elo_pipeline(data_dir=None) -> Season:
    config, starting, games = load_season(data_dir)
    model = EloModel(config=config, store=RatingStore.from_mapping(starting, config.mean_elo))
    n = model.fit(games)
    print(f"✓ Processed {n} completed games (weeks 1-{model.weeks_completed})")
    return Season(config=config, games=games, ratings=model.store.to_dict(),
                  n_completed=n, weeks_completed=model.weeks_completed)


def run_week_predictions(season: Season, week: int) -> str:
    preds = predict_week(season.games, season.ratings, season.config, week=week)
    if not preds:
        return f"No future games found for week {week}."
    return format_predictions(f"Predictions (Week {week}) — future games only:", preds)


def run_team_predictions(season: Season, team: str) -> str:
    preds = predict_team(season.games, season.ratings, season.config, team=team)
    if not preds:
        return f"No future games found for {team}."
    return format_predictions(f"Future games for {team}:", preds)


def run_records(season: Season) -> pd.DataFrame:
    records = projected_records(season.ratings, season.games, season.config)
    return records_table(records, season.ratings)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="season-elo", description="Season Elo ratings and forecasts")
    p.add_argument("--data-dir", default=None, help="directory or URL prefix holding the season files")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("ratings", help="print final ratings")

    wk = sub.add_parser("week", help="forecast one week's unplayed games")
    wk.add_argument("week", type=int)

    tm = sub.add_parser("team", help="forecast one team's unplayed games")
    tm.add_argument("team")

    rec = sub.add_parser("records", help="current and projected W-L table")
    rec.add_argument("--out", default=None, help="also save the table as CSV under this name")

    fc = sub.add_parser("forecast", help="forecast every unplayed game")
    fc.add_argument("--out", default=None, help="also save the forecasts as CSV under this name")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        season = run_elo_pipeline(args.data_dir)
    except DataLoadError as e:
        print(f"Failed to load data: {e}", file=sys.stderr)
        return 1

    if args.command == "ratings":
        print(format_ratings(season.ratings))
    elif args.command == "week":
        print(run_week_predictions(season, args.week))
    elif args.command == "team":
        print(run_team_predictions(season, args.team))
    elif args.command == "records":
        table = run_records(season)
        print(format_records(table))
        if args.out:
            save_predictions(table, args.out)
    elif args.command == "forecast":
        frame = forecast_frame(season.games, season.ratings, season.config)
        print(frame.to_string(index=False) if not frame.empty else "No future games found.")
        if args.out:
            save_predictions(frame, args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
