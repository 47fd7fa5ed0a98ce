"""
Equity value simulation: vectorised GBM Monte Carlo engine.
"""

import numpy as np

from config.params import SIM_CONFIG, SimulationConfig


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Random source for the simulator; seed=None draws OS entropy."""
    return np.random.default_rng(seed)


class GBMSimulator:
    """
    Geometric Brownian Motion simulator.

    S(t+dt) = S(t) * exp((μ - σ²/2)*dt + σ*√dt*Z)

    Paths are independent by default. antithetic=True (or
    SimulationConfig.antithetic) pairs each Z with -Z, which reduces estimator
    variance but makes path pairs dependent.

    Drift is evaluated in float64, so an extreme sigma drives the paths to 0
    instead of raising OverflowError.
    """

    def __init__(self, mu: float = 0.0, sigma: float | None = None,
                 config: SimulationConfig = SIM_CONFIG,
                 antithetic: bool | None = None):
        self.mu = mu
        self.sigma = sigma
        self.config = config
        self.antithetic = config.antithetic if antithetic is None else antithetic

    def _normals(self, rng: np.random.Generator, n_paths: int,
                 n_steps: int) -> np.ndarray:
        if not self.antithetic:
            return rng.standard_normal((n_paths, n_steps))

        half = n_paths // 2
        z = rng.standard_normal((half, n_steps))
        z_full = np.concatenate([z, -z], axis=0)
        if n_paths % 2 == 1:
            extra = rng.standard_normal((1, n_steps))
            z_full = np.concatenate([z_full, extra], axis=0)
        return z_full

    def simulate(self, s0: float, n_paths: int | None = None,
                 n_steps: int | None = None, dt: float | None = None,
                 sigma: float | None = None,
                 rng: np.random.Generator | None = None) -> np.ndarray:
        """
        Generate GBM value paths.

        Parameters:
            s0: Initial value
            n_paths: Number of paths
            n_steps: Number of time steps
            dt: Time step size (year fraction)
            sigma: Override volatility (required if not set in __init__)
            rng: NumPy random generator; built from config.seed when None

        Returns:
            Array of shape (n_paths, n_steps + 1) with value paths.
            Column 0 is s0.
        """
        n_paths = n_paths or self.config.n_simulations
        n_steps = n_steps or self.config.horizon_days
        dt = dt or self.config.dt
        sigma = sigma if sigma is not None else self.sigma
        if sigma is None:
            raise ValueError("sigma must be provided either in __init__ or simulate().")
        if rng is None:
            rng = make_rng(self.config.seed)

        z = self._normals(rng, n_paths, n_steps)

        sigma = np.float64(sigma)
        with np.errstate(over="ignore", invalid="ignore"):
            drift = (self.mu - 0.5 * np.square(sigma)) * dt
            diffusion = sigma * np.sqrt(dt) * z

            log_returns = drift + diffusion
            log_values = np.cumsum(log_returns, axis=1)

            # Prepend zero column for initial value
            log_values = np.concatenate(
                [np.zeros((log_values.shape[0], 1)), log_values], axis=1
            )

            return s0 * np.exp(log_values)

    def terminal_values(self, s0: float, sigma: float | None = None,
                        rng: np.random.Generator | None = None) -> np.ndarray:
        """Terminal values only, shape (n_paths,)."""
        return self.simulate(s0, sigma=sigma, rng=rng)[:, -1]
