from __future__ import annotations

from dataclasses import dataclass, field
from time import monotonic
from typing import Callable, Dict, Hashable, Tuple


@dataclass(slots=True)
class ClickTracker:
	"""Counts consecutive clicks so the input layer can recognise double-clicks.

	A click continues the current streak when it uses the same button, lands
	on the same target, arrives within ``max_interval`` seconds of the previous
	click and no further than ``max_distance`` pixels from it. Otherwise the
	streak restarts at one.
	"""

	max_interval: float = 0.35
	max_distance: float = 6.0
	clock: Callable[[], float] | None = field(default=None, repr=False)

	_clock: Callable[[], float] = field(init=False, repr=False)
	_last_click: Dict[int, Tuple[float, float, float, Hashable, int]] = field(init=False, repr=False)
	_max_distance_sq: float = field(init=False, repr=False)
	_max_interval: float = field(init=False, repr=False)

	def __post_init__(self) -> None:
		self._clock = self.clock or monotonic
		self._last_click = {}
		dist = max(0.0, float(self.max_distance))
		self._max_distance_sq = dist * dist
		self._max_interval = max(0.0, float(self.max_interval))

	def register(self, x: float, y: float, button: int, target: Hashable = None) -> int:
		"""Record a click and return its position in the current streak (1, 2, ...)."""
		now = self._clock()
		streak = 1
		last = self._last_click.get(button)
		if last is not None:
			last_time, last_x, last_y, last_target, last_streak = last
			dx = x - last_x
			dy = y - last_y
			if (
				last_target == target
				and (now - last_time) <= self._max_interval
				and (dx * dx + dy * dy) <= self._max_distance_sq
			):
				streak = last_streak + 1
		self._last_click[button] = (now, x, y, target, streak)
		return streak

	def is_double(self, x: float, y: float, button: int, target: Hashable = None) -> bool:
		"""Register a click; True when it completes a double-click (the streak then restarts)."""
		streak = self.register(x, y, button, target)
		if streak >= 2:
			self._last_click.pop(button, None)
			return True
		return False
