import pytest

from altseo.language import DEFAULT_LANGUAGE, DetectionSample, LanguageDetector, LanguageProfile


def _make_detector(**kwargs: object) -> LanguageDetector:
    return LanguageDetector(**kwargs)  # type: ignore[arg-type]


class TestShortText:
    def test_too_short_defaults_to_english(self) -> None:
        assert _make_detector().detect("Hi") == "English"

    def test_empty_defaults_to_english(self) -> None:
        assert _make_detector().detect("") == DEFAULT_LANGUAGE

    def test_markup_only_defaults_to_english(self) -> None:
        assert _make_detector().detect("<p>   </p><br/>") == "English"

    def test_length_is_measured_after_cleaning(self) -> None:
        assert _make_detector().detect("<div><span>Hi</span></div>") == "English"


class TestScriptDetection:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("這是中文文字", "Chinese"),
            ("ひらがなとカタカナ", "Japanese"),
            ("안녕하세요 여러분", "Korean"),
            ("สวัสดีครับ ทุกคน", "Thai"),
            ("שלום לכולם כאן", "Hebrew"),
            ("আমার সোনার বাংলা", "Bengali"),
            ("გამარჯობა მეგობრებო", "Georgian"),
            ("Բարեւ ձեզ բոլորին", "Armenian"),
        ],
    )
    def test_detects_single_language_scripts(self, text: str, expected: str) -> None:
        assert _make_detector().detect(text) == expected

    def test_kanji_matches_chinese_before_japanese(self) -> None:
        assert _make_detector().detect("これは日本語です") == "Chinese"

    def test_script_wins_over_latin_words(self) -> None:
        text = "The title of this post is 這是中文 and the rest is English"
        assert _make_detector().detect(text) == "Chinese"


class TestSharedScripts:
    def test_arabic(self) -> None:
        assert _make_detector().detect("هذا هو النص في العربية") == "Arabic"

    def test_persian(self) -> None:
        assert _make_detector().detect("این یک متن فارسی است") == "Persian"

    def test_urdu(self) -> None:
        assert _make_detector().detect("یہ اردو زبان ہے اور میں") == "Urdu"

    def test_hindi(self) -> None:
        assert _make_detector().detect("यह एक परीक्षण है") == "Hindi"

    def test_marathi(self) -> None:
        assert _make_detector().detect("हे माझे घर आहे") == "Marathi"

    def test_devanagari_without_hint_words_is_hindi(self) -> None:
        assert _make_detector().detect("नमस्ते दुनिया") == "Hindi"


class TestStatisticalDetection:
    def test_german_example(self) -> None:
        assert _make_detector().detect("Das ist ein Test") == "German"

    def test_german_example_score(self) -> None:
        scores = _make_detector().score_languages("Das ist ein Test")
        assert scores["German"] == 15

    def test_english(self) -> None:
        text = "The weather is nice and the sun is shining in the park"
        assert _make_detector().detect(text) == "English"

    def test_spanish(self) -> None:
        assert _make_detector().detect("El niño está en la casa con su familia") == "Spanish"

    def test_french(self) -> None:
        text = "Le chat est très grand et il dort dans la maison"
        assert _make_detector().detect(text) == "French"

    def test_russian(self) -> None:
        assert _make_detector().detect("Привет, как дела? Это очень хорошо") == "Russian"

    def test_markup_is_ignored(self) -> None:
        html = "<p class='the the the'>Das ist ein Test</p><script>var the = 1;</script>"
        assert _make_detector().detect(html) == "German"

    def test_scores_follow_profile_order(self) -> None:
        scores = _make_detector().score_languages("Das ist ein Test")
        assert list(scores)[:4] == ["English", "Spanish", "French", "German"]


class TestThresholdAndTies:
    def test_score_of_two_is_not_a_verdict(self) -> None:
        detector = _make_detector(
            profiles=[LanguageProfile("Testish", chars=("q",))],
            frequency_chars=(),
        )
        sample = DetectionSample.from_text("q zzzzz")

        assert detector.detect_by_statistics(sample) is None
        assert detector.detect("q zzzzz") == "English"

    def test_score_above_two_is_a_verdict(self) -> None:
        detector = _make_detector(
            profiles=[LanguageProfile("Testish", chars=("q",))],
            frequency_chars=(),
        )
        assert detector.detect("qq zzzz") == "Testish"

    def test_tie_goes_to_first_profile(self) -> None:
        detector = _make_detector(
            profiles=[
                LanguageProfile("First", chars=("x",)),
                LanguageProfile("Second", chars=("x",)),
            ],
            frequency_chars=(),
        )
        assert detector.detect("xx xx") == "First"

    def test_higher_score_beats_order(self) -> None:
        detector = _make_detector(
            profiles=[
                LanguageProfile("First", chars=("x",)),
                LanguageProfile("Second", chars=("x", "y")),
            ],
            frequency_chars=(),
        )
        assert detector.detect("xx yy") == "Second"

    def test_words_match_whole_words_only(self) -> None:
        detector = _make_detector(
            profiles=[LanguageProfile("Testish", words=("cat",))],
            frequency_chars=(),
        )
        assert detector.score_languages("concatenate category")["Testish"] == 0
        assert detector.score_languages("the cat sat")["Testish"] == 5


class TestCharacterFrequency:
    def test_polish_by_diacritics(self) -> None:
        assert _make_detector().detect("Zażółć gęślą jaźń") == "Polish"

    def test_statistics_run_before_frequency(self) -> None:
        detector = _make_detector(
            profiles=[LanguageProfile("Testish", chars=("ą", "ę"))],
        )
        assert detector.detect("Zażółć gęślą jaźń") == "Testish"

    def test_frequency_below_threshold_is_ignored(self) -> None:
        detector = _make_detector(profiles=[], frequency_chars=(("Testish", ("ż",)),))
        assert detector.detect("żż zzzz") == "English"


class TestDeterminism:
    @pytest.mark.parametrize(
        "text",
        [
            "Hi",
            "Привет, как дела? Это пример текста.",
            "Der Hund und die Katze sind nicht im Haus.",
            "Zażółć gęślą jaźń",
            "<p>The quick brown fox</p> [gallery ids=\"1,2\"]",
            "le la der die",
        ],
    )
    def test_same_input_same_answer(self, text: str) -> None:
        detector = _make_detector()
        first = detector.detect(text)

        assert detector.detect(text) == first
        assert _make_detector().detect(text) == first


class TestLanguageCodes:
    @pytest.mark.parametrize(
        ("name", "code"),
        [("English", "en"), ("German", "de"), ("Chinese", "zh"), ("Persian", "fa")],
    )
    def test_known_codes(self, name: str, code: str) -> None:
        assert LanguageDetector.get_language_code(name) == code

    def test_unknown_language_falls_back_to_en(self) -> None:
        assert LanguageDetector.get_language_code("Klingon") == "en"

    def test_supported_languages_are_unique(self) -> None:
        languages = _make_detector().supported_languages()
        assert len(languages) == len(set(languages))
        assert {"Persian", "Marathi", "German", "Polish"} <= set(languages)


class TestDetectionSample:
    def test_truncates_to_sample_length(self) -> None:
        sample = DetectionSample.from_text("a" * 50, sample_length=10)
        assert len(sample) == 10

    def test_collapses_whitespace(self) -> None:
        sample = DetectionSample.from_text("  one \n\n two\tthree  ")
        assert sample.text == "one two three"

    def test_normalizes_to_nfc(self) -> None:
        sample = DetectionSample.from_text("café noir")
        assert sample.text == "caf\u00e9 noir"

    def test_lowered(self) -> None:
        assert DetectionSample.from_text("Das IST").lowered == "das ist"
