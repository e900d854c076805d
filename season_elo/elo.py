# season_elo/elo.py
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional

from season_elo.config import EloConfig
from season_elo.forecast import win_probability
from season_elo.games import GameRecord, completed_games, to_score

logger = logging.getLogger(__name__)

MOV_SCALE = 2.2             # closeness dampening in K'
GAP_SCALE = 0.001


@dataclass
class RatingStore:
    mean_elo: float = 1500.0
    ratings: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, ratings: Optional[Mapping[str, float]], mean_elo: float) -> "RatingStore":
        return cls(mean_elo=mean_elo, ratings={t: float(r) for t, r in (ratings or {}).items()})

    def get(self, team: str) -> float:
        # unseen teams read as the mean without being stored
        return self.ratings.get(team, self.mean_elo)

    def seed(self, team: str) -> float:
        return self.ratings.setdefault(team, float(self.mean_elo))

    def set(self, team: str, rating: float):
        self.ratings[team] = float(rating)

    def __contains__(self, team):
        return team in self.ratings

    def __len__(self):
        return len(self.ratings)

    def to_dict(self) -> Dict[str, float]:
        return dict(self.ratings)


@dataclass
class EloModel:
    config: EloConfig = field(default_factory=EloConfig)
    store: Optional[RatingStore] = None
    weeks_completed: int = 0

    def __post_init__(self):
        if self.store is None:
            self.store = RatingStore(mean_elo=self.config.mean_elo)

    @staticmethod
    def expected(winner_elo, loser_elo, hfa_adj=0.0) -> float:
        # same logistic curve as forecasting, seen from the winner's side
        return float(win_probability(winner_elo, loser_elo, hfa_adj))

    @staticmethod
    def k_prime(k, mov, elo_diff_abs, week_weight):
        factor = MOV_SCALE / (elo_diff_abs * GAP_SCALE + MOV_SCALE)
        return k + mov * factor * week_weight

    def week_weight(self, week) -> float:
        """
        Recency weight: 1.0 for the latest completed week, halving every
        `half_life_weeks` before it. Capped at 1.
        """
        half_life = self.config.half_life_weeks
        if half_life <= 0:
            return 1.0
        lam = math.log(2) / half_life
        return min(1.0, math.exp(-lam * (self.weeks_completed - week)))

    def update_game(self, game: GameRecord) -> float:
        """Apply one completed game to the store and return the rating delta."""
        winner, loser = game.winner, game.loser
        winner_prior = self.store.seed(winner)
        loser_prior = self.store.seed(loser)

        hfa = self.config.home_field_advantage
        hfa_adj = -hfa if game.winner_is_away else hfa
        e = self.expected(winner_prior, loser_prior, hfa_adj)

        mov = max(1.0, to_score(game.winner_score) - to_score(game.loser_score))
        k = self.k_prime(self.config.K, mov, abs(winner_prior - loser_prior), self.week_weight(game.week))
        delta = k * (1 - e)

        self.store.set(winner, winner_prior + delta)
        self.store.set(loser, loser_prior - delta)
        logger.debug("week %s: %s def. %s, E=%.4f K'=%.2f delta=%.2f",
                     game.week, winner, loser, e, k, delta)
        return delta

    def fit(self, games: Iterable[GameRecord]) -> int:
        """Fold every completed game in week order. Returns the number applied."""
        done = [g for g in completed_games(games) if g.week is not None]
        if not done:
            return 0
        self.weeks_completed = max(g.week for g in done)
        applied = 0
        # sorted() is stable: same-week games keep schedule order
        for g in sorted(done, key=lambda g: g.week):
            if not g.winner or not g.loser:
                continue
            self.update_game(g)
            applied += 1
        return applied


def compute_final_ratings(initial_ratings: Optional[Mapping[str, float]],
                          games: Iterable[GameRecord],
                          config: Optional[EloConfig] = None) -> Dict[str, float]:
    config = config or EloConfig()
    model = EloModel(config=config, store=RatingStore.from_mapping(initial_ratings, config.mean_elo))
    applied = model.fit(games)
    logger.info("Processed %d completed games (weeks 1-%d)", applied, model.weeks_completed)
    return model.store.to_dict()
