from difiko.app.text_input import TextInput


def test_text_input_insert_and_cursor():
    t = TextInput("")
    t.insert("a")
    t.insert("b")
    assert t.buffer == "ab"
    assert t.cursor == 2
    t.move_left()
    t.insert("X")
    assert t.buffer == "aXb"
    assert t.cursor == 2


def test_text_input_backspace_multibyte():
    t = TextInput("héllo")
    t.move_end()
    t.backspace()
    assert t.buffer == "héll"
    t.move_left()
    t.move_left()
    assert t.cursor == 2
    t.backspace()
    assert t.buffer == "hll"
    assert t.cursor == 1


def test_text_input_delete_at_end_is_noop():
    t = TextInput("ab")
    t.move_end()
    t.delete()
    assert t.buffer == "ab"
    assert t.cursor == 2


def test_new_places_cursor_at_end():
    t = TextInput("héllo")
    assert t.cursor == len("héllo")


def test_delete_removes_char_under_cursor():
    t = TextInput("abc")
    t.move_home()
    t.delete()
    assert t.buffer == "bc"
    assert t.cursor == 0


def test_backspace_at_start_is_noop():
    t = TextInput("abc")
    t.move_home()
    t.backspace()
    assert t.buffer == "abc"
    assert t.cursor == 0


def test_move_right_stops_at_end_and_clear_resets():
    t = TextInput("ab")
    t.move_right()
    assert t.cursor == 2
    t.clear()
    assert t.buffer == ""
    assert t.cursor == 0