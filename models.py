"""
🧠 DATA MODELS — Baby-level explanation
========================================
Little boxes that hold the routine: which classes exist, which days, which
time slots, and what subject + teacher sits in every box of the weekly grid.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple


DEFAULT_DAYS: Tuple[str, ...] = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday")
DEFAULT_CLASS_NAMES: Tuple[str, ...] = ("Nursery", "KG")
DEFAULT_TIME_SLOTS: Tuple[Tuple[str, str], ...] = (("7:30", "8:30"), ("8:30", "9:40"))

CELL_FIELDS = ("subject", "teacher")


@dataclass(frozen=True)
class TimeSlot:
    """
    One period of the day, same for every day.
    - start / end: free-text labels typed by the operator (e.g. "7:30", "8:30")
    """

    start: str = ""
    end: str = ""

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class Cell:
    """One box in the grid. Empty string = nothing assigned yet."""

    subject: str = ""
    teacher: str = ""


EMPTY_CELL = Cell()


@dataclass
class ScheduleConfig:
    """
    Routine settings the operator fills in before generating the grid.
    - days: display order of days (e.g. Sunday..Thursday)
    - class_names: unique class names (e.g. ["Nursery", "KG"])
    - time_slots: periods in order
    """

    days: List[str]
    class_names: List[str]
    time_slots: List[TimeSlot] = field(default_factory=list)


def default_config() -> ScheduleConfig:
    """Fresh copy of the built-in defaults."""
    return ScheduleConfig(
        days=list(DEFAULT_DAYS),
        class_names=list(DEFAULT_CLASS_NAMES),
        time_slots=[TimeSlot(s, e) for s, e in DEFAULT_TIME_SLOTS],
    )


class Schedule:
    """
    The whole grid: classes x days x slots, always full.

    Cells live in a nested list indexed by integer positions
    (class_idx, day_idx, slot_idx). Names are mapped to positions once,
    so the shape is fixed by the three sequences given at construction.
    Treat instances as values: mutation helpers return a new Schedule.
    """

    def __init__(
        self,
        class_names: Sequence[str],
        days: Sequence[str],
        time_slots: Sequence[TimeSlot],
        cells: Optional[List[List[List[Cell]]]] = None,
    ):
        self.class_names: Tuple[str, ...] = tuple(class_names)
        self.days: Tuple[str, ...] = tuple(days)
        self.time_slots: Tuple[TimeSlot, ...] = tuple(time_slots)
        if len(set(self.class_names)) != len(self.class_names):
            raise ValueError(f"Class names must be unique: {list(self.class_names)}")
        if len(set(self.days)) != len(self.days):
            raise ValueError(f"Day names must be unique: {list(self.days)}")
        self._class_index: Dict[str, int] = {c: i for i, c in enumerate(self.class_names)}
        self._day_index: Dict[str, int] = {d: i for i, d in enumerate(self.days)}
        if cells is None:
            cells = [
                [[EMPTY_CELL for _ in self.time_slots] for _ in self.days]
                for _ in self.class_names
            ]
        elif not self._has_shape(cells):
            raise ValueError("Cell array does not match classes x days x slots")
        self.cells = cells

    def _has_shape(self, cells: List[List[List[Cell]]]) -> bool:
        if len(cells) != len(self.class_names):
            return False
        for per_class in cells:
            if len(per_class) != len(self.days):
                return False
            for per_day in per_class:
                if len(per_day) != len(self.time_slots):
                    return False
        return True

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (len(self.class_names), len(self.days), len(self.time_slots))

    def class_index(self, class_name: str) -> int:
        try:
            return self._class_index[class_name]
        except KeyError:
            raise KeyError(f"Unknown class: {class_name!r}") from None

    def day_index(self, day: str) -> int:
        try:
            return self._day_index[day]
        except KeyError:
            raise KeyError(f"Unknown day: {day!r}") from None

    def get(self, class_name: str, day: str, slot_index: int) -> Cell:
        """Cell for (class, day, slot). Raises KeyError / IndexError when outside the grid."""
        if not 0 <= slot_index < len(self.time_slots):
            raise IndexError(f"Slot index {slot_index} out of range")
        return self.cells[self.class_index(class_name)][self.day_index(day)][slot_index]

    def iter_cells(self):
        """Yield (class_name, day, slot_index, cell) in class, day, slot order."""
        for ci, class_name in enumerate(self.class_names):
            for di, day in enumerate(self.days):
                for si, cell in enumerate(self.cells[ci][di]):
                    yield class_name, day, si, cell

    def copy_cells(self) -> List[List[List[Cell]]]:
        """New nested lists; Cell objects are immutable and shared."""
        return [[list(per_day) for per_day in per_class] for per_class in self.cells]

    def to_dict(self) -> Dict[str, Dict[str, List[dict]]]:
        """schedule[class][day][slot] = {"subject", "teacher"}, JSON friendly."""
        return {
            class_name: {
                day: [{"subject": c.subject, "teacher": c.teacher} for c in self.cells[ci][di]]
                for di, day in enumerate(self.days)
            }
            for ci, class_name in enumerate(self.class_names)
        }

    @classmethod
    def from_dict(cls, data: dict, config: ScheduleConfig) -> "Schedule":
        """
        Rebuild a grid from its nested dict form, using config for the shape.
        Raises KeyError / TypeError / ValueError when data does not fit config.
        """
        cells = []
        for class_name in config.class_names:
            per_class = []
            for day in config.days:
                slots = data[class_name][day]
                if len(slots) != len(config.time_slots):
                    raise ValueError(
                        f"{class_name}/{day} has {len(slots)} slots, expected {len(config.time_slots)}"
                    )
                per_class.append([Cell(str(s["subject"]), str(s["teacher"])) for s in slots])
            cells.append(per_class)
        return cls(config.class_names, config.days, config.time_slots, cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return (
            self.class_names == other.class_names
            and self.days == other.days
            and self.time_slots == other.time_slots
            and self.cells == other.cells
        )

    def __repr__(self) -> str:
        c, d, s = self.shape
        return f"Schedule({c} classes x {d} days x {s} slots)"
