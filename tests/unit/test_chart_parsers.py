"""Unit tests for the sequence, pie and Gantt parsers."""

import pytest

from mermaidflow.diagrams import MessageStyle, TaskStatus
from mermaidflow.parsers.gantt import DEFAULT_SECTION, parse_task, status_from_flags
from mermaidflow.parsers.sequence import MESSAGE_TOKENS


class TestSequenceParser:
    """Tests for sequence diagram parsing."""

    def test_auto_declares_in_first_seen_order(self, parser):
        """Test message endpoints become participants in order."""
        diagram = parser.parse("sequenceDiagram\nA->>B: hi\nB-->>A: hey")
        assert [p.id for p in diagram.participants] == ["A", "B"]
        assert [m.text for m in diagram.messages] == ["hi", "hey"]

    def test_declarations(self, parser, sequence_input):
        """Test participant/actor declarations with aliases."""
        diagram = parser.parse(sequence_input)
        participants = {p.id: p for p in diagram.participants}
        assert participants["A"].label == "Alice"
        assert participants["A"].is_actor is False
        assert participants["B"].label == "Bob"
        assert participants["B"].is_actor is True
        assert participants["C"].label == "C"

    def test_redeclaration_updates_label(self, parser):
        """Test re-declaring a participant updates it in place."""
        diagram = parser.parse(
            "sequenceDiagram\nA->>B: x\nparticipant B as Bravo"
        )
        assert [p.id for p in diagram.participants] == ["A", "B"]
        assert diagram.participants[1].label == "Bravo"

    @pytest.mark.parametrize(
        "line,style",
        [
            ("A->>B: m", MessageStyle.SOLID_ARROW),
            ("A-->>B: m", MessageStyle.DOTTED_ARROW),
            ("A->B: m", MessageStyle.SOLID_LINE),
            ("A-->B: m", MessageStyle.DOTTED_LINE),
            ("A-xB: m", MessageStyle.SOLID_CROSS),
            ("A--xB: m", MessageStyle.DOTTED_CROSS),
            ("A-)B: m", MessageStyle.SOLID_ASYNC),
            ("A--)B: m", MessageStyle.DOTTED_ASYNC),
        ],
    )
    def test_arrow_styles(self, parser, line, style):
        """Test each arrow token selects its style."""
        message = parser.parse("sequenceDiagram\n" + line).messages[0]
        assert message.style == style
        assert (message.source, message.target) == ("A", "B")

    def test_text_keeps_later_colons(self, parser):
        """Test only the first colon separates target and text."""
        message = parser.parse("sequenceDiagram\nA->>B: at 10:30").messages[0]
        assert message.text == "at 10:30"

    @pytest.mark.parametrize(
        "line,text",
        [
            ("Alice->Bob: re-xamine", "re-xamine"),
            ("Alice->Bob: use -->> for replies", "use -->> for replies"),
        ],
    )
    def test_tokens_inside_text_are_not_arrows(self, parser, line, text):
        """Test a token inside the text does not split the line."""
        diagram = parser.parse("sequenceDiagram\n" + line)
        assert [p.id for p in diagram.participants] == ["Alice", "Bob"]
        message = diagram.messages[0]
        assert (message.source, message.target) == ("Alice", "Bob")
        assert message.style == MessageStyle.SOLID_LINE
        assert message.text == text

    def test_message_needs_colon(self, parser):
        """Test an arrow without `: text` is not a message."""
        diagram = parser.parse("sequenceDiagram\nA->>B")
        assert diagram.messages == ()
        assert diagram.participants == ()

    def test_activation_markers(self, parser):
        """Test +/- activation markers are not part of the target id."""
        diagram = parser.parse("sequenceDiagram\nA->>+B: go\nB-->>-A: done")
        assert [p.id for p in diagram.participants] == ["A", "B"]

    def test_unknown_lines_skipped(self, parser):
        """Test non-message lines are ignored."""
        diagram = parser.parse("sequenceDiagram\nautonumber\nloop Every minute\nend")
        assert diagram.messages == ()

    def test_token_table_prefers_longer_tokens(self):
        """Test each token comes before any shorter token it contains."""
        literals = [token for token, _ in MESSAGE_TOKENS]
        for index, token in enumerate(literals):
            for later in literals[index + 1:]:
                assert token not in later
        assert literals.index("-->>") < literals.index("->>")
        assert literals.index("-->>") < literals.index("-->")
        assert len(literals) == 8


class TestPieParser:
    """Tests for pie chart parsing."""

    def test_slices_and_title(self, parser, pie_input):
        """Test title from the header and decimal values."""
        diagram = parser.parse(pie_input)
        assert diagram.title == "Pets adopted"
        assert [(s.label, s.value) for s in diagram.slices] == [
            ("Dogs", 386.0),
            ("Cats", 85.5),
            ("Rats", 15.0),
        ]

    def test_title_line_when_unset(self, parser):
        """Test a bare title line sets the title when the header has none."""
        diagram = parser.parse('pie\ntitle Budget\n"A" : 1')
        assert diagram.title == "Budget"

    def test_title_line_does_not_override(self, parser):
        """Test a later title line does not replace the header title."""
        diagram = parser.parse('pie title First\ntitle Second\n"A" : 1')
        assert diagram.title == "First"

    def test_show_data(self, parser):
        """Test the showData flag in the header."""
        assert parser.parse("pie showData title T").show_data is True
        assert parser.parse("pie showData title T").title == "T"
        assert parser.parse("pie").show_data is False

    def test_bad_values_skipped(self, parser):
        """Test malformed slice lines are ignored."""
        diagram = parser.parse('pie\n"A" : 1.2.3\n"B" : abc\nC : 4\n"D" : 5')
        assert [s.label for s in diagram.slices] == ["D"]


class TestGanttParser:
    """Tests for Gantt chart parsing."""

    def test_directives_and_sections(self, parser, gantt_input):
        """Test title, dateFormat and sections."""
        diagram = parser.parse(gantt_input)
        assert diagram.title == "A Gantt Diagram"
        assert diagram.date_format == "YYYY-MM-DD"
        assert [s.name for s in diagram.sections] == ["Design", "Build"]
        assert [len(s.tasks) for s in diagram.sections] == [2, 2]

    def test_task_fields(self, parser, gantt_input):
        """Test task tokens are classified by shape."""
        tasks = parser.parse(gantt_input).tasks
        assert tasks[0].status == TaskStatus.DONE
        assert tasks[0].id == "des1"
        assert tasks[1].status == TaskStatus.ACTIVE
        assert tasks[1].start_date == "2024-01-09"
        assert tasks[1].duration == "3d"
        assert tasks[2].status == TaskStatus.CRITICAL
        assert tasks[2].after_id == "des2"
        assert tasks[2].duration == "5d"
        assert tasks[3].status == TaskStatus.NORMAL
        assert tasks[3].duration == "20d"

    def test_default_section(self, parser):
        """Test tasks before any section go into the default section."""
        diagram = parser.parse("gantt\nSetup : 1d\nsection Main\nWork : 2d")
        assert [s.name for s in diagram.sections] == [DEFAULT_SECTION, "Main"]

    def test_ignored_directives(self, parser):
        """Test formatting directives are skipped."""
        diagram = parser.parse(
            "gantt\naxisFormat %Y\ntodayMarker off\nexcludes weekends\nTask : 1d"
        )
        assert len(diagram.tasks) == 1

    @pytest.mark.parametrize(
        "flags,status",
        [
            (set(), TaskStatus.NORMAL),
            ({"done"}, TaskStatus.DONE),
            ({"active"}, TaskStatus.ACTIVE),
            ({"crit"}, TaskStatus.CRITICAL),
            ({"crit", "done"}, TaskStatus.CRITICAL_DONE),
            ({"crit", "active"}, TaskStatus.CRITICAL_ACTIVE),
        ],
    )
    def test_status_from_flags(self, flags, status):
        """Test every flag combination."""
        assert status_from_flags(frozenset(flags)) == status

    def test_parse_task_week_and_hour_durations(self):
        """Test w and h suffixes are durations."""
        assert parse_task("T", "2w").duration == "2w"
        assert parse_task("T", "crit, 12h").duration == "12h"

    def test_parse_task_flags_only_lead(self):
        """Test flag words after the first non-flag token are not flags."""
        task = parse_task("T", "t1, done")
        assert task.status == TaskStatus.NORMAL
