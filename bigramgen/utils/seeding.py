"""Random sources for sampling.

Samplers take the random source as an argument instead of reaching for a
global one. Either a ``torch.Generator`` or any object with a ``random()``
method returning floats in [0, 1) (``random.Random`` for example) works.
"""

import random
from typing import Optional, Union

import torch


RandomSource = Union[torch.Generator, random.Random]


def make_generator(seed: Optional[int] = None) -> torch.Generator:
    """Create a torch generator, seeded when a seed is given."""
    g = torch.Generator()
    if seed is None:
        g.seed()
    else:
        g.manual_seed(seed)
    return g


def uniform(rng: RandomSource) -> float:
    """Draw a float uniformly from [0, 1)."""
    if isinstance(rng, torch.Generator):
        return torch.rand((), generator=rng, dtype=torch.float64).item()
    return rng.random()
