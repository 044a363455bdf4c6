import unittest

from selection_model import SelectionAggregate, SelectionModel


class SelectionModelTests(unittest.TestCase):
    def test_toggle_twice_restores_state(self):
        model = SelectionModel({"b"})
        for row_id in (0, 7, "a", "b", ("team", 3)):
            before = model.is_selected(row_id)
            model.toggle(row_id)
            self.assertNotEqual(model.is_selected(row_id), before)
            model.toggle(row_id)
            self.assertEqual(model.is_selected(row_id), before)

    def test_replayed_select_is_a_no_op(self):
        model = SelectionModel()
        events = []
        model.subscribe(lambda added, removed: events.append((added, removed)))

        self.assertTrue(model.set_selected(4, True))
        self.assertFalse(model.set_selected(4, True))
        self.assertFalse(model.set_selected(5, False))
        self.assertEqual(events, [(frozenset({4}), frozenset())])
        self.assertEqual(model.version, 1)

    def test_select_all_and_clear_are_inverses(self):
        ids = list(range(1000))
        model = SelectionModel()
        model.select_all(ids)
        self.assertEqual(model.aggregate_state(ids), SelectionAggregate.ALL)
        model.clear()
        self.assertEqual(model.aggregate_state(ids), SelectionAggregate.NONE)

    def test_deselect_one_after_select_all_reads_some(self):
        ids = range(1000)
        model = SelectionModel()
        model.select_all(ids)
        model.toggle(500)
        self.assertEqual(model.aggregate_state(ids), SelectionAggregate.SOME)
        self.assertEqual(len(model), 999)

    def test_aggregate_of_no_ids_is_none(self):
        model = SelectionModel({1})
        self.assertEqual(model.aggregate_state([]), SelectionAggregate.NONE)

    def test_stale_ids_never_count_towards_all(self):
        model = SelectionModel({1, 2, 99})
        self.assertEqual(model.aggregate_state([1, 2]), SelectionAggregate.ALL)
        self.assertEqual(model.aggregate_state([1, 2, 3]), SelectionAggregate.SOME)
        self.assertEqual(model.stale_ids([1, 2]), frozenset({99}))
        # stale ids stay until reconciled
        self.assertIn(99, model)

        self.assertEqual(model.reconcile([1, 2]), frozenset({99}))
        self.assertEqual(model.snapshot, frozenset({1, 2}))
        self.assertEqual(model.reconcile([1, 2]), frozenset())

    def test_snapshots_are_not_affected_by_later_mutations(self):
        model = SelectionModel({1})
        snap = model.snapshot
        model.toggle(2)
        model.clear()
        self.assertEqual(snap, frozenset({1}))
        self.assertIsInstance(snap, frozenset)

    def test_bulk_operations_report_only_changes(self):
        model = SelectionModel({1, 2})
        self.assertEqual(model.select_all([1, 2, 3, 4]), frozenset({3, 4}))
        self.assertEqual(model.deselect_all([4, 5]), frozenset({4}))
        self.assertEqual(model.clear(), frozenset({1, 2, 3}))
        self.assertEqual(model.clear(), frozenset())

    def test_unsubscribe_stops_notifications(self):
        model = SelectionModel()
        events = []
        unsubscribe = model.subscribe(lambda added, removed: events.append(added))
        model.toggle(1)
        unsubscribe()
        model.toggle(2)
        self.assertEqual(events, [frozenset({1})])


if __name__ == "__main__":
    unittest.main()
