"""Tests for the terminal chooser, driven by a scripted prompt session."""

import io

from rich.console import Console

from gguf_launcher.chooser import TerminalChooser


class ScriptedSession:
    """Replays answers; an exception instance is raised instead of returned."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def prompt(self, message):
        self.prompts.append(message)
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer


def make_chooser(*answers):
    console = Console(file=io.StringIO(), width=200)
    return TerminalChooser(console=console, session=ScriptedSession(*answers))


def test_number_selects_option():
    chooser = make_chooser("2")
    assert chooser.choose("Pick", ["a", "b", "c"]) == 1


def test_empty_answer_selects_default():
    chooser = make_chooser("")
    assert chooser.choose("Pick", ["a", "b", "c"], default=2) == 2


def test_invalid_answers_reprompt():
    chooser = make_chooser("0", "x", "4", "3")
    assert chooser.choose("Pick", ["a", "b", "c"]) == 2
    assert len(chooser.session.prompts) == 4
    assert "between 1 and 3" in chooser.console.file.getvalue()


def test_menu_lists_options_in_order():
    chooser = make_chooser("1")
    chooser.choose("Pick", ["first.gguf", "second.gguf"])

    output = chooser.console.file.getvalue()
    assert output.index("first.gguf") < output.index("second.gguf")


def test_quit_cancels():
    assert make_chooser("q").choose("Pick", ["a"]) is None


def test_ctrl_c_and_ctrl_d_cancel():
    assert make_chooser(KeyboardInterrupt()).choose("Pick", ["a"]) is None
    assert make_chooser(EOFError()).ask_text("Url") is None


def test_no_options_means_no_selection():
    chooser = make_chooser()
    assert chooser.choose("Pick", []) is None
    assert chooser.session.prompts == []


def test_ask_text_skips_blank_lines():
    chooser = make_chooser("", "https://host/model.gguf")
    assert chooser.ask_text("Enter the model url") == "https://host/model.gguf"
