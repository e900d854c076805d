# season_elo/datasets.py
"""
Loading utilities for the three season inputs:
    config.json        -> EloConfig
    starting_elo.json  -> {team: rating}
    schedule.csv       -> [GameRecord]
Each source may be a local path or an http(s) URL.

Usage:
    from season_elo.datasets import load_season
    config, ratings, games = load_season("data")
"""
import csv
import json
import logging
import math
from pathlib import Path
from typing import Dict, List, Tuple

import pandas as pd
import requests
from tqdm import tqdm

from season_elo.config import (
    CONFIG_FILE, DATA_DIR, OUT_DIR, RATINGS_FILE, SCHEDULE_FILE, EloConfig,
)
from season_elo.games import GameRecord

logger = logging.getLogger(__name__)

SCHEDULE_COLS = ["week", "winner", "winner_score", "winner_is_away", "loser", "loser_score"]


class DataLoadError(RuntimeError):
    """Raised when an input source cannot be fetched or parsed."""


def _is_url(source) -> bool:
    return str(source).startswith(("http://", "https://"))


def _read_text(source) -> str:
    logger.debug("Attempting to load %s", source)
    if _is_url(source):
        try:
            resp = requests.get(str(source), timeout=30)
        except requests.RequestException as e:
            raise DataLoadError(f"Failed to load {source}: {e}") from e
        logger.debug("Response status for %s: %s", source, resp.status_code)
        if resp.status_code != 200:
            raise DataLoadError(f"Failed to load {source}: {resp.status_code}")
        return resp.text
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DataLoadError(f"Failed to load {source}: {e}") from e


def load_json(source):
    text = _read_text(source)
    try:
        data = json.loads(text.replace("\ufeff", ""))
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Failed to parse {source}: {e}") from e
    logger.debug("Successfully loaded %s", source)
    return data


def load_config(source) -> EloConfig:
    data = load_json(source)
    if not isinstance(data, dict):
        raise DataLoadError(f"Expected a JSON object in {source}, got {type(data).__name__}")
    return EloConfig.from_dict(data)


def load_starting_ratings(source) -> Dict[str, float]:
    data = load_json(source) or {}
    if not isinstance(data, dict):
        raise DataLoadError(f"Expected a JSON object in {source}, got {type(data).__name__}")
    ratings = {}
    for team, elo in data.items():
        try:
            value = float(elo)
        except (TypeError, ValueError):
            value = math.nan
        if not math.isfinite(value):
            logger.warning("Ignoring non-numeric starting rating for %s: %r", team, elo)
            continue
        ratings[str(team)] = value
    return ratings


def schedule_frame(text: str) -> pd.DataFrame:
    """
    Parse schedule CSV text into a string DataFrame with SCHEDULE_COLS.
    The header row is skipped; columns are taken by position, so short rows
    are padded with blanks and extra trailing fields are dropped.
    """
    width = len(SCHEDULE_COLS)
    lines = text.replace("\ufeff", "").strip().splitlines()[1:]
    rows = []
    for cells in csv.reader(lines):
        cells = [c.replace('"', "").strip() for c in cells]
        if not any(cells):
            continue
        rows.append((cells + [""] * width)[:width])
    return pd.DataFrame(rows, columns=SCHEDULE_COLS)


def load_schedule(source) -> List[GameRecord]:
    text = _read_text(source)
    try:
        df = schedule_frame(text)
    except csv.Error as e:
        raise DataLoadError(f"Failed to parse {source}: {e}") from e

    games = []
    for i, row in enumerate(df.to_dict("records"), start=2):
        g = GameRecord.from_row(row)
        if g.week is None:
            logger.warning("%s line %d: unparseable week %r, row dropped", source, i, row["week"])
            continue
        games.append(g)
    logger.debug("Successfully loaded %s, %d rows", source, len(games))
    return games


def load_season(data_dir=None) -> Tuple[EloConfig, Dict[str, float], List[GameRecord]]:
    """Load config, starting ratings and schedule from one directory (or URL prefix)."""
    base = str(data_dir or DATA_DIR).rstrip("/")
    steps = [
        (CONFIG_FILE, load_config),
        (RATINGS_FILE, load_starting_ratings),
        (SCHEDULE_FILE, load_schedule),
    ]
    out = []
    for name, loader in tqdm(steps, desc="Loading season data", leave=False):
        src = f"{base}/{name}" if _is_url(base) else Path(base) / name
        out.append(loader(src))
    config, ratings, games = out
    return config, ratings, games


def save_predictions(frame: pd.DataFrame, out_name: str, out_dir=None) -> Path:
    out_dir = Path(out_dir or OUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / out_name
    frame.to_csv(out_path, index=False)
    print(f"✅ Saved predictions to {out_path}")
    return out_path
