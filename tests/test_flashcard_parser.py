"""Tests for flashcard text parsing and grading."""

from liferamp.parsers.flashcard import Question, parse_flashcard


class TestParseFlashcard:
    """Tests for parse_flashcard."""

    def test_well_formed_card(self, sample_flashcard):
        """Every question gets a prompt, four options and a correct letter."""
        card = parse_flashcard(sample_flashcard)

        assert card.video_url == "https://www.youtube.com/watch?v=abc123XYZ"
        assert len(card.questions) == 2
        for question in card.questions:
            assert question.prompt
            assert len(question.options) == 4
            assert question.correct_letter in {"a", "b", "c", "d"}

    def test_prompt_and_options_are_stripped_of_markers(self, sample_flashcard):
        card = parse_flashcard(sample_flashcard)
        first = card.questions[0]

        assert first.prompt == "What is the first step of active listening?"
        assert first.options[1] == "Paying attention"
        assert first.correct == "b"

    def test_description_block(self, sample_flashcard):
        """Description text runs until the Questions: marker."""
        card = parse_flashcard(sample_flashcard)

        assert card.description_lines == [
            "Active listening means giving the speaker your full attention.",
            "It builds trust.",
        ]

    def test_missing_correct_line(self):
        """A question without Correct: has an empty correct field."""
        content = "Questions:\n1. Pick one\na) x\nb) y\nc) z\nd) w\n"
        card = parse_flashcard(content)

        assert len(card.questions) == 1
        assert card.questions[0].correct == ""
        assert card.questions[0].correct_letter == ""

    def test_no_video_url(self):
        card = parse_flashcard("Description: Just text\nQuestions:\n1. Q?\na) yes\n")

        assert card.video_url is None
        assert card.embed_url is None
        assert card.video_id is None

    def test_empty_and_garbage_input(self):
        assert parse_flashcard("").questions == []
        assert parse_flashcard("random words\nwithout structure").questions == []

    def test_continuation_lines(self):
        """Extra lines extend the last option, or the prompt before any option."""
        content = (
            "Questions:\n"
            "1. A long prompt\n"
            "that wraps\n"
            "a) first\n"
            "b) second option\n"
            "continues here\n"
            "Correct: B) second option\n"
        )
        question = parse_flashcard(content).questions[0]

        assert question.prompt == "A long prompt that wraps"
        assert question.options == ["first", "second option continues here"]
        assert question.correct_letter == "b"

    def test_case_insensitive_markers(self):
        content = "Questions:\n1. Q?\nA) one\nB) two\ncorrect: A\n"
        question = parse_flashcard(content).questions[0]

        assert question.options == ["one", "two"]
        assert question.correct_letter == "a"

    def test_lines_before_first_question_are_ignored(self):
        content = "Questions:\nstray line\na) orphan option\n1. Real?\na) yes\n"
        card = parse_flashcard(content)

        assert len(card.questions) == 1
        assert card.questions[0].options == ["yes"]

    def test_description_marker_inside_questions(self):
        """Once Questions: is seen, a later Description: line does not end the questions."""
        content = (
            "Description: Intro\n"
            "Questions:\n"
            "1. First?\n"
            "a) yes\n"
            "Correct: a\n"
            "Description: stray\n"
            "2. Second?\n"
            "a) no\n"
            "Correct: a\n"
        )
        card = parse_flashcard(content)

        assert card.description_lines == ["Intro"]
        assert [q.prompt for q in card.questions] == ["First?", "Second?"]

    def test_embed_and_thumbnail(self, sample_flashcard):
        card = parse_flashcard(sample_flashcard)

        assert card.embed_url == "https://www.youtube.com/embed/abc123XYZ"
        assert card.thumbnail_url(["i.ytimg.com"]) == "https://i.ytimg.com/vi/abc123XYZ/hqdefault.jpg"
        assert card.thumbnail_url(["example.com"]) is None


class TestGrading:
    """Tests for answering flashcard questions."""

    def test_grade_counts_correct_answers(self, sample_flashcard):
        card = parse_flashcard(sample_flashcard)
        result = card.grade({0: "b", 1: "c"})

        assert result.correct == 1
        assert result.total == 2
        assert result.results[0]["is_correct"] is True
        assert result.results[1]["is_correct"] is False
        assert result.results[1]["correct_letter"] == "a"

    def test_unanswered_question(self, sample_flashcard):
        card = parse_flashcard(sample_flashcard)
        result = card.grade({})

        assert result.correct == 0
        assert result.results[0]["answer"] is None

    def test_question_without_correct_is_never_correct(self):
        question = Question(prompt="Q", options=["a", "b"], correct="")

        assert question.is_correct("a") is False
