'''
Undo log and immediate operator key tests
'''


def test_undo_push(machine, feed):
    machine.stack = [1.0, 2.0]
    feed('3', 'undo')
    assert machine.stack == [1.0, 2.0]
    assert machine.message == 'Undid last operation'


def test_undo_is_lifo(feed):
    m = feed('1', '2', '+')
    assert m.stack == [3.0]
    feed('undo')
    assert m.stack == [1.0, 2.0]
    feed('undo')
    assert m.stack == [1.0]
    feed('undo')
    assert m.stack == []
    feed('undo')
    assert m.stack == []
    assert m.message == 'Nothing to undo'


def test_undo_preset_history(machine, feed):
    machine.stack = [1.0, 2.0]
    machine.history.append([1.0])
    assert feed('undo').stack == [1.0]


def test_nothing_to_undo(machine, feed):
    machine.stack = [1.0]
    m = feed('undo')
    assert m.stack == [1.0]
    assert 'Nothing to undo' in m.message


def test_undo_clear(machine, feed):
    machine.stack = [1.0, 2.0]
    feed('clear', 'undo')
    assert machine.stack == [1.0, 2.0]


def test_failed_operation_still_snapshots(machine, feed):
    machine.stack = [1.0]
    feed('+')
    assert machine.history == [[1.0]]
    feed('nonsense')
    assert machine.history == [[1.0], [1.0]]
    feed('undo')
    assert machine.stack == [1.0]
    assert machine.message == 'Undid last operation'


def test_undo_and_help_do_not_snapshot(machine, feed):
    feed('1', '2')
    feed('help')
    assert len(machine.history) == 2
    feed('undo')
    assert machine.history == [[]]


def test_snapshots_are_copies(machine, feed):
    feed('1', '2', 'swap')
    assert machine.history == [[], [1.0], [1.0, 2.0]]
    assert machine.stack == [2.0, 1.0]


def test_empty_input_is_ignored(machine):
    machine.message = 'unchanged'
    machine.submit_line()
    assert machine.stack == []
    assert machine.history == []
    assert machine.message == 'unchanged'


def test_reset_stack_cannot_be_undone(machine, feed):
    feed('1', '2')
    machine.reset_stack()
    feed('undo')
    assert machine.stack == [1.0]


def test_single_char_operator(machine):
    machine.stack = [3.0, 4.0]
    machine.submit_single_char('*')
    assert machine.stack == [12.0]
    assert machine.history == [[3.0, 4.0]]
    assert list(machine.calc_history) == ['3 * 4 = 12']


def test_single_char_flushes_pending_input(machine):
    machine.stack = [3.0]
    machine.input = '4'
    machine.submit_single_char('+')
    assert machine.stack == [7.0]
    assert machine.input == ''


def test_single_char_flush_snapshots_twice(machine, feed):
    machine.stack = [3.0]
    machine.input = '4'
    machine.submit_single_char('+')
    assert machine.history == [[3.0], [3.0, 4.0]]
    feed('undo')
    assert machine.stack == [3.0, 4.0]
    feed('undo')
    assert machine.stack == [3.0]


def test_single_char_factorial(machine):
    machine.input = '5'
    machine.submit_single_char('!')
    assert machine.stack == [120.0]


def test_single_char_division_by_zero(machine):
    machine.stack = [5.0, 0.0]
    machine.submit_single_char('/')
    assert machine.stack == [5.0, 0.0]
    assert machine.message == 'Division by zero'


def test_single_char_other_is_noop_but_snapshots(machine):
    machine.stack = [1.0]
    machine.message = 'unchanged'
    machine.submit_single_char('x')
    assert machine.stack == [1.0]
    assert machine.message == 'unchanged'
    assert machine.history == [[1.0]]
