"""
Risk metrics: Monte Carlo Value-at-Risk on equity value.
"""

import math

import numpy as np

from config.params import SIM_CONFIG, VAR_CONFIDENCE, SimulationConfig
from models.price_simulation import GBMSimulator


class RiskMetrics:
    """
    Loss statistics from simulated terminal values.
    """

    @staticmethod
    def tail_index(n_paths: int, confidence: float = VAR_CONFIDENCE) -> int:
        """Index of the (1 - confidence) quantile in an ascending sort."""
        return max(0, int(np.floor((1.0 - confidence) * n_paths + 1e-9)))

    @staticmethod
    def var(initial_value: float, terminal: np.ndarray,
            confidence: float = VAR_CONFIDENCE) -> float:
        """
        Value at Risk: initial value minus the order-statistic quantile of
        terminal values, floored at zero.
        Returns a non-negative number representing the loss.
        """
        if terminal.size == 0:
            return 0.0
        ordered = np.sort(terminal)
        idx = min(RiskMetrics.tail_index(ordered.size, confidence), ordered.size - 1)
        return float(max(0.0, initial_value - ordered[idx]))


def monte_carlo_var_95(
    initial_equity: float,
    volatility: float,
    drift: float = 0.0,
    config: SimulationConfig = SIM_CONFIG,
    rng: np.random.Generator | None = None,
) -> float:
    """
    95% one-year VaR of equity under daily GBM.

    Simulates config.n_simulations paths over config.horizon_days steps,
    takes the terminal value at sorted index floor(0.05 * N) and returns
    max(0, initial_equity - that value). Returns 0.0 for non-positive equity.
    Unbounded volatility wipes out every path, so VaR is the whole equity.
    """
    if initial_equity <= 0.0:
        return 0.0
    if not math.isfinite(volatility):
        return float(initial_equity)
    sim = GBMSimulator(mu=drift, sigma=volatility, config=config)
    terminal = sim.terminal_values(initial_equity, rng=rng)
    return RiskMetrics.var(initial_equity, terminal, VAR_CONFIDENCE)
