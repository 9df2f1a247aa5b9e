from altseo.language.detector import LanguageDetector
from altseo.language.profiles import DEFAULT_LANGUAGE, LanguageProfile, ScriptRange
from altseo.language.sample import DetectionSample

__all__ = [
    "DEFAULT_LANGUAGE",
    "DetectionSample",
    "LanguageDetector",
    "LanguageProfile",
    "ScriptRange",
]
