"""Autopilot agents for headless exploration runs.

Re-exports the base class and all concrete agents so consumers can do::

    from depthcrawl.play_agents import ExplorerAgent, RandomExplorer
"""

from .base import ExplorerAgent
from .random_explorer import RandomExplorer
from .thorough_explorer import ThoroughExplorer

__all__ = ["ExplorerAgent", "RandomExplorer", "ThoroughExplorer"]
