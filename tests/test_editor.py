import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import editor
import storage
from models import Cell, TimeSlot, default_config


class _TempDataDir(unittest.TestCase):
    """Points storage at a throwaway directory for each test."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)
        patcher = mock.patch.object(storage, "DATA_DIR", self.data_dir)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)


class StorageTests(_TempDataDir):
    def test_defaults_when_nothing_saved(self):
        self.assertEqual(storage.load_config(), default_config())
        self.assertIsNone(storage.load_schedule(default_config()))
        self.assertFalse(storage.load_has_generated())

    def test_corrupt_files_fall_back(self):
        (self.data_dir / "config.json").write_text("{not json", encoding="utf-8")
        (self.data_dir / "schedule.json").write_text("[1, 2", encoding="utf-8")
        (self.data_dir / "has_generated_schedule.json").write_text("??", encoding="utf-8")
        with self.assertLogs("storage", level="WARNING"):
            self.assertEqual(storage.load_config(), default_config())
        self.assertIsNone(storage.load_schedule(default_config()))
        self.assertFalse(storage.load_has_generated())

    def test_schedule_not_matching_config_is_dropped(self):
        state = editor.EditorState()
        editor.generate(state)
        config = default_config()
        config.time_slots.append(TimeSlot("10", "11"))
        with self.assertLogs("storage", level="WARNING"):
            self.assertIsNone(storage.load_schedule(config))

    def test_schedule_with_teacher_clash_is_dropped(self):
        seed = editor.EditorState()
        editor.generate(seed)
        saved = seed.schedule.to_dict()
        saved["Nursery"]["Sunday"][0] = {"subject": "Math", "teacher": "X"}
        saved["KG"]["Sunday"][0] = {"subject": "Art", "teacher": "X"}
        (self.data_dir / "schedule.json").write_text(json.dumps(saved), encoding="utf-8")

        with self.assertLogs("storage", level="WARNING"):
            self.assertIsNone(storage.load_schedule(default_config()))

        with self.assertLogs("storage", level="WARNING"):
            state = editor.load_state()
        self.assertIsNone(state.schedule)
        editor.generate(state)
        self.assertTrue(editor.edit_cell(state, "KG", "Thursday", 1, "subject", "Math"))
        self.assertEqual(state.error, "")

    def test_config_with_repeated_days_falls_back(self):
        config = {"days": ["Mon", "Mon"], "class_names": ["A"], "time_slots": [{"start": "9", "end": "10"}]}
        (self.data_dir / "config.json").write_text(json.dumps(config), encoding="utf-8")
        with self.assertLogs("storage", level="WARNING"):
            self.assertEqual(storage.load_config(), default_config())

        with self.assertLogs("storage", level="WARNING"):
            state = editor.load_state()
        editor.generate(state)
        self.assertEqual(state.schedule.days, tuple(default_config().days))

    def test_config_with_blank_class_name_falls_back(self):
        config = {"days": ["Mon"], "class_names": ["A", "  "], "time_slots": [{"start": "9", "end": "10"}]}
        (self.data_dir / "config.json").write_text(json.dumps(config), encoding="utf-8")
        with self.assertLogs("storage", level="WARNING"):
            self.assertEqual(storage.load_config(), default_config())

        with self.assertLogs("storage", level="WARNING"):
            state = editor.load_state()
        editor.generate(state)
        self.assertEqual(state.schedule.class_names, tuple(default_config().class_names))

    def test_schedule_json_layout(self):
        state = editor.EditorState()
        editor.generate(state)
        editor.edit_cell(state, "KG", "Monday", 1, "subject", "Math")
        data = json.loads((self.data_dir / "schedule.json").read_text(encoding="utf-8"))
        self.assertEqual(data["KG"]["Monday"][1], {"subject": "Math", "teacher": ""})
        self.assertEqual(len(data["Nursery"]["Sunday"]), 2)

    def test_clear_state(self):
        editor.generate(editor.EditorState())
        storage.clear_state()
        self.assertEqual(list(self.data_dir.iterdir()), [])


class EditorTests(_TempDataDir):
    def setUp(self):
        super().setUp()
        self.state = editor.EditorState()
        editor.change_class_count(self.state, 2)
        editor.set_class_names(self.state, ["A", "B"])
        editor.change_period_count(self.state, 1)
        editor.change_time_slot(self.state, 0, start="9", end="10")
        editor.generate(self.state)

    def test_conflicting_edit_reverted(self):
        self.assertTrue(editor.edit_cell(self.state, "A", "Monday", 0, "teacher", "X"))
        committed = self.state.schedule

        self.assertFalse(editor.edit_cell(self.state, "B", "Monday", 0, "teacher", "X"))
        self.assertIs(self.state.schedule, committed)
        self.assertIn("Monday", self.state.error)
        self.assertIn("9-10", self.state.error)
        self.assertIn('"X"', self.state.error)
        self.assertFalse(editor.can_export(self.state))

        # What's on disk is still the committed grid
        reloaded = editor.load_state()
        self.assertEqual(reloaded.schedule, committed)

        self.assertTrue(editor.edit_cell(self.state, "B", "Monday", 0, "teacher", "Y"))
        self.assertEqual(self.state.error, "")
        self.assertTrue(editor.can_export(self.state))

    def test_state_round_trips_through_storage(self):
        editor.edit_cell(self.state, "B", "Thursday", 0, "subject", "Arabic")
        reloaded = editor.load_state()
        self.assertTrue(reloaded.has_generated)
        self.assertEqual(reloaded.config.class_names, ["A", "B"])
        self.assertEqual(reloaded.config.time_slots, [TimeSlot("9", "10")])
        self.assertEqual(reloaded.schedule.get("B", "Thursday", 0), Cell("Arabic", ""))

    def test_shrink_and_regrow_persists_empty_cells(self):
        editor.change_class_count(self.state, 3)
        editor.edit_cell(self.state, "Class 3", "Sunday", 0, "subject", "Math")
        editor.change_class_count(self.state, 1)
        editor.change_class_count(self.state, 3)
        self.assertEqual(self.state.schedule.get("Class 3", "Sunday", 0), Cell())
        self.assertEqual(editor.load_state().schedule.shape, (3, 5, 1))

    def test_rename_rejected_leaves_state(self):
        with self.assertRaises(ValueError):
            editor.rename_class(self.state, 0, "B")
        self.assertEqual(self.state.config.class_names, ["A", "B"])

    def test_generate_wipes_grid(self):
        editor.edit_cell(self.state, "A", "Sunday", 0, "subject", "Math")
        editor.generate(self.state)
        self.assertEqual(self.state.schedule.get("A", "Sunday", 0), Cell())

    def test_new_routine_resets_everything(self):
        editor.new_routine(self.state)
        self.assertIsNone(self.state.schedule)
        self.assertFalse(self.state.has_generated)
        self.assertEqual(self.state.config, default_config())
        reloaded = editor.load_state()
        self.assertIsNone(reloaded.schedule)
        self.assertFalse(reloaded.has_generated)

    def test_edit_before_generate(self):
        with self.assertRaises(ValueError):
            editor.edit_cell(editor.EditorState(), "Nursery", "Sunday", 0, "subject", "Math")


if __name__ == "__main__":
    unittest.main()
