"""Static detection tables.

Table order is significant everywhere in this module: every stage of the
detector resolves ties in favour of the entry listed first.
"""

from dataclasses import dataclass

DEFAULT_LANGUAGE = "English"


@dataclass(frozen=True)
class LanguageProfile:
    """Word, character and sub-word signature of one language."""

    name: str
    words: tuple[str, ...] = ()
    chars: tuple[str, ...] = ()
    patterns: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScriptRange:
    """Code-point ranges of a writing system, inclusive on both ends."""

    name: str
    ranges: tuple[tuple[int, int], ...]
    shared_by: tuple[str, ...] = ()

    def matches(self, char: str) -> bool:
        code_point = ord(char)
        return any(low <= code_point <= high for low, high in self.ranges)


@dataclass(frozen=True)
class ScriptLanguageHint:
    """Short words that tell apart the languages sharing one script."""

    language: str
    words: tuple[str, ...]


SCRIPT_RANGES: tuple[ScriptRange, ...] = (
    ScriptRange("Arabic", ((0x0600, 0x06FF), (0x0750, 0x077F), (0x08A0, 0x08FF)),
                shared_by=("Arabic", "Persian", "Urdu")),
    ScriptRange("Chinese", ((0x4E00, 0x9FFF), (0x3400, 0x4DBF))),
    ScriptRange("Japanese", ((0x3040, 0x309F), (0x30A0, 0x30FF), (0x31F0, 0x31FF))),
    ScriptRange("Korean", ((0xAC00, 0xD7AF), (0x1100, 0x11FF), (0x3130, 0x318F))),
    ScriptRange("Thai", ((0x0E00, 0x0E7F),)),
    ScriptRange("Hebrew", ((0x0590, 0x05FF),)),
    ScriptRange("Devanagari", ((0x0900, 0x097F),), shared_by=("Hindi", "Marathi", "Nepali")),
    ScriptRange("Bengali", ((0x0980, 0x09FF),)),
    ScriptRange("Tamil", ((0x0B80, 0x0BFF),)),
    ScriptRange("Telugu", ((0x0C00, 0x0C7F),)),
    ScriptRange("Kannada", ((0x0C80, 0x0CFF),)),
    ScriptRange("Malayalam", ((0x0D00, 0x0D7F),)),
    ScriptRange("Gujarati", ((0x0A80, 0x0AFF),)),
    ScriptRange("Punjabi", ((0x0A00, 0x0A7F),)),
    ScriptRange("Oriya", ((0x0B00, 0x0B7F),)),
    ScriptRange("Myanmar", ((0x1000, 0x109F),)),
    ScriptRange("Khmer", ((0x1780, 0x17FF),)),
    ScriptRange("Lao", ((0x0E80, 0x0EFF),)),
    ScriptRange("Georgian", ((0x10A0, 0x10FF),)),
    ScriptRange("Armenian", ((0x0530, 0x058F),)),
    ScriptRange("Ethiopian", ((0x1200, 0x137F),)),
    ScriptRange("Cherokee", ((0x13A0, 0x13FF),)),
    ScriptRange("Canadian_Aboriginal", ((0x1400, 0x167F),)),
)

# First entry of each tuple is the script default when no hint word occurs.
SCRIPT_LANGUAGE_HINTS: dict[str, tuple[ScriptLanguageHint, ...]] = {
    "Devanagari": (
        ScriptLanguageHint("Hindi", ("है", "का", "की", "के", "में", "से", "को", "और", "यह", "वह")),
        ScriptLanguageHint("Marathi", ("आहे", "आणि", "हे", "ते", "या", "नाही", "मध्ये", "आहेत")),
        ScriptLanguageHint("Nepali", ("छ", "हो", "र", "पनि", "गर्न", "थियो", "छन्", "हुन्छ")),
    ),
    "Arabic": (
        ScriptLanguageHint("Arabic", ("في", "من", "على", "إلى", "هذا", "التي", "الذي", "عن")),
        ScriptLanguageHint("Persian", ("است", "این", "را", "که", "می", "برای", "با", "شود")),
        ScriptLanguageHint("Urdu", ("ہے", "کے", "میں", "اور", "کی", "کہ", "ہیں", "یہ")),
    ),
}

LANGUAGE_PROFILES: tuple[LanguageProfile, ...] = (
    LanguageProfile(
        "English",
        words=("the", "be", "to", "of", "and", "a", "in", "that", "have", "i", "it", "for",
               "not", "on", "with", "he", "as", "you", "do", "at", "this", "but", "his", "by",
               "from", "they", "we", "say", "her", "she"),
        patterns=("th", "he", "in", "er", "an", "re", "ed", "nd", "on", "en"),
    ),
    LanguageProfile(
        "Spanish",
        words=("el", "la", "de", "que", "y", "en", "un", "es", "se", "no", "te", "lo", "le",
               "da", "su", "por", "son", "con", "para", "del", "los", "las", "una", "pero",
               "todo", "bien", "fue", "muy", "hasta", "desde"),
        chars=("ñ", "á", "é", "í", "ó", "ú", "¿", "¡"),
        patterns=("ción", "idad", "mente", "endo", "ando"),
    ),
    LanguageProfile(
        "French",
        words=("le", "de", "et", "à", "un", "il", "être", "avoir", "que", "pour", "dans", "ce",
               "son", "une", "sur", "avec", "ne", "se", "pas", "tout", "plus", "par", "grand",
               "mais", "qui", "lui", "où", "très", "sans", "chez"),
        chars=("à", "é", "è", "ê", "ë", "î", "ï", "ô", "ù", "û", "ü", "ÿ", "ç"),
        patterns=("tion", "ment", "eux", "ique", "oir"),
    ),
    LanguageProfile(
        "German",
        words=("der", "die", "und", "in", "den", "von", "zu", "das", "mit", "sich", "des",
               "auf", "für", "ist", "im", "dem", "nicht", "ein", "eine", "als", "auch", "es",
               "an", "werden", "aus", "er", "hat", "dass", "sie", "nach"),
        chars=("ä", "ö", "ü", "ß"),
        patterns=("ung", "keit", "lich", "sch", "tch"),
    ),
    LanguageProfile(
        "Italian",
        words=("il", "di", "che", "e", "la", "per", "un", "in", "con", "del", "da", "a", "al",
               "le", "se", "gli", "come", "più", "o", "ma", "una", "su", "lo", "anche",
               "tutto", "della", "tra", "quando", "molto", "fare"),
        chars=("à", "è", "é", "ì", "í", "ò", "ó", "ù", "ú"),
        patterns=("zione", "mente", "aggio", "ezza", "ità"),
    ),
    LanguageProfile(
        "Portuguese",
        words=("o", "de", "a", "e", "que", "do", "da", "em", "um", "para", "é", "com", "não",
               "uma", "os", "no", "se", "na", "por", "mais", "as", "dos", "como", "mas",
               "foi", "ao", "ele", "das", "tem", "à"),
        chars=("ã", "á", "à", "â", "é", "ê", "í", "ó", "ô", "õ", "ú", "ü", "ç"),
        patterns=("ção", "mente", "ões", "idade", "izar"),
    ),
    LanguageProfile(
        "Dutch",
        words=("de", "van", "het", "een", "en", "in", "te", "dat", "op", "voor", "met", "als",
               "zijn", "er", "aan", "om", "door", "ze", "dan", "of", "naar", "bij", "hij",
               "heeft", "ook", "over", "zich", "uit", "maar", "kan"),
        chars=("ij", "oe", "aa", "ee", "oo", "uu"),
        patterns=("lijk", "heid", "isch", "atie", "eren"),
    ),
    LanguageProfile(
        "Russian",
        words=("в", "и", "не", "на", "с", "что", "а", "по", "это", "как", "его", "к", "он",
               "до", "за", "для", "от", "же", "то", "но", "или", "ты", "мы", "вы", "их",
               "кто", "уже", "бы", "где", "есть"),
        chars=tuple("абвгдеёжзийклмнопрстуфхцчшщъыьэюя"),
        patterns=("ость", "ение", "ание", "ство", "ный"),
    ),
    LanguageProfile(
        "Swahili",
        words=("na", "ya", "wa", "ni", "za", "la", "kwa", "hii", "kila", "yote", "mtu", "watu",
               "kutoka", "kwenda", "nyingi", "moja", "mbili", "tatu", "nne", "tano", "sita",
               "saba", "nane", "tisa", "kumi"),
        patterns=("wa", "ki", "ku", "ya", "za", "la", "pa", "mu"),
    ),
    LanguageProfile(
        "Vietnamese",
        words=("và", "của", "có", "trong", "là", "một", "được", "cho", "với", "không", "các",
               "này", "đó", "những", "tại", "từ", "sau", "về", "đã", "sẽ", "ra", "nó", "họ",
               "năm", "ngày"),
        chars=("ă", "â", "đ", "ê", "ô", "ơ", "ư"),
        patterns=("ng", "nh", "th", "tr", "ch", "ph", "qu"),
    ),
    LanguageProfile(
        "Indonesian",
        words=("yang", "dan", "di", "ke", "dari", "untuk", "dengan", "ini", "itu", "pada",
               "dalam", "tidak", "akan", "adalah", "atau", "juga", "oleh", "saya", "kita",
               "mereka", "ada", "sudah", "bisa", "harus", "dapat"),
        patterns=("ng", "an", "kan", "nya", "ter", "ber", "men", "per"),
    ),
    LanguageProfile(
        "Malay",
        words=("yang", "dan", "di", "ke", "dari", "untuk", "dengan", "ini", "itu", "pada",
               "dalam", "tidak", "akan", "adalah", "atau", "juga", "oleh", "saya", "kita",
               "mereka", "ada", "sudah", "boleh", "mesti", "dapat"),
        patterns=("ng", "an", "kan", "nya", "ter", "ber", "men", "per"),
    ),
    LanguageProfile(
        "Filipino",
        words=("ang", "ng", "sa", "na", "at", "mga", "ay", "para", "hindi", "ako", "siya",
               "kami", "kayo", "sila", "ito", "iyan", "iyon", "dito", "diyan", "doon", "may",
               "wala", "kung", "pero", "kasi"),
        patterns=("ng", "an", "in", "um", "mag", "pag", "ka", "ma"),
    ),
)

# Latin-script languages told apart only by their diacritics.
FREQUENCY_CHARS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Finnish", ("ä", "ö", "y")),
    ("Swedish", ("å", "ä", "ö")),
    ("Norwegian", ("æ", "ø", "å")),
    ("Danish", ("æ", "ø", "å")),
    ("Icelandic", ("þ", "ð", "æ")),
    ("Polish", ("ą", "ć", "ę", "ł", "ń", "ó", "ś", "ź", "ż")),
    ("Czech", ("á", "č", "ď", "é", "ě", "í", "ň", "ó", "ř", "š", "ť", "ú", "ů", "ý", "ž")),
    ("Slovak", ("á", "ä", "č", "ď", "é", "í", "ĺ", "ľ", "ň", "ó", "ô", "ŕ", "š", "ť", "ú",
                "ý", "ž")),
    ("Hungarian", ("á", "é", "í", "ó", "ö", "ő", "ú", "ü", "ű")),
    ("Romanian", ("ă", "â", "î", "ș", "ț")),
    ("Croatian", ("č", "ć", "đ", "š", "ž")),
    ("Serbian", ("č", "ć", "đ", "š", "ž")),
    ("Slovenian", ("č", "š", "ž")),
    ("Lithuanian", ("ą", "č", "ę", "ė", "į", "š", "ų", "ū", "ž")),
    ("Latvian", ("ā", "č", "ē", "ģ", "ī", "ķ", "ļ", "ņ", "š", "ū", "ž")),
    ("Estonian", ("ä", "ö", "ü", "õ")),
    ("Turkish", ("ç", "ğ", "ı", "ö", "ş", "ü")),
)

LANGUAGE_CODES: dict[str, str] = {
    "English": "en",
    "Spanish": "es",
    "French": "fr",
    "German": "de",
    "Italian": "it",
    "Portuguese": "pt",
    "Dutch": "nl",
    "Russian": "ru",
    "Chinese": "zh",
    "Japanese": "ja",
    "Korean": "ko",
    "Arabic": "ar",
    "Persian": "fa",
    "Urdu": "ur",
    "Hindi": "hi",
    "Marathi": "mr",
    "Nepali": "ne",
    "Bengali": "bn",
    "Tamil": "ta",
    "Telugu": "te",
    "Kannada": "kn",
    "Malayalam": "ml",
    "Gujarati": "gu",
    "Punjabi": "pa",
    "Oriya": "or",
    "Thai": "th",
    "Vietnamese": "vi",
    "Indonesian": "id",
    "Malay": "ms",
    "Filipino": "fil",
    "Swahili": "sw",
    "Turkish": "tr",
    "Polish": "pl",
    "Czech": "cs",
    "Slovak": "sk",
    "Hungarian": "hu",
    "Romanian": "ro",
    "Croatian": "hr",
    "Serbian": "sr",
    "Slovenian": "sl",
    "Lithuanian": "lt",
    "Latvian": "lv",
    "Estonian": "et",
    "Finnish": "fi",
    "Swedish": "sv",
    "Norwegian": "no",
    "Danish": "da",
    "Icelandic": "is",
    "Hebrew": "he",
    "Georgian": "ka",
    "Armenian": "hy",
    "Myanmar": "my",
    "Khmer": "km",
    "Lao": "lo",
    "Ethiopian": "am",
    "Cherokee": "chr",
}
