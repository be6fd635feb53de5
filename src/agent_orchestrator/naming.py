"""Readable agent names derived from task text.

"Fix authentication bug" becomes ``fix-authentication``, "Create README file"
becomes ``create-readme-file``. Names are unique within a session: a repeated
base name gets a random three character suffix.
"""

import random
import re
import string

# words that don't add meaning to an agent name
STOP_WORDS = frozenset({
    "a", "an", "the", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "shall", "can", "need", "dare",
    "to", "of", "in", "for", "on", "with", "at", "by", "from", "as",
    "into", "through", "during", "before", "after", "above", "below",
    "between", "under", "again", "further", "then", "once", "here",
    "there", "when", "where", "why", "how", "all", "each", "few",
    "more", "most", "other", "some", "such", "no", "nor", "not",
    "only", "own", "same", "so", "than", "too", "very", "just",
    "and", "but", "if", "or", "because", "until", "while", "although",
    "this", "that", "these", "those", "it", "its", "my", "your", "our",
    "their", "his", "her", "me", "you", "us", "them", "him",
    "please", "hey", "hi", "hello", "thanks", "ok", "okay",
    "want", "like", "get", "make", "put", "go", "going",
})

MAX_NAME_LENGTH = 20
WORDS_TO_EXTRACT = 3
FALLBACK_NAME = "agent"
SUFFIX_LENGTH = 3

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_NON_NAME_CHARS = re.compile(r"[^a-z0-9\s-]")


def extract_meaningful_words(text: str) -> list[str]:
    """Lowercase, strip punctuation and drop stop words and 1-char tokens."""
    normalized = _NON_NAME_CHARS.sub(" ", text.lower()).strip()
    return [
        word for word in normalized.split()
        if len(word) > 1 and word not in STOP_WORDS
    ]


def base_name(text: str) -> str:
    """Derive the kebab-case base name for a task, without any suffix."""
    words = extract_meaningful_words(text)[:WORDS_TO_EXTRACT] or [FALLBACK_NAME]
    name = "-".join(words)

    if len(name) > MAX_NAME_LENGTH:
        name = name[:MAX_NAME_LENGTH]
        # drop a dangling hyphen or a one or two character word fragment
        last_hyphen = name.rfind("-")
        if last_hyphen > 0 and len(name) - last_hyphen < 4:
            name = name[:last_hyphen]

    return name


class NameGenerator:
    """Issues session-unique agent names.

    Names are remembered for the lifetime of the generator (or until
    ``reset``), so a name freed by removing its agent is not handed out
    again in the same session.
    """

    def __init__(self, rng: random.Random | None = None):
        self._used: set[str] = set()
        self._rng = rng or random.Random()

    @property
    def used_names(self) -> frozenset[str]:
        return frozenset(self._used)

    def generate(self, task_text: str) -> str:
        """Generate a unique name for a task description.

        Args:
            task_text: The task prompt to derive the name from.

        Returns:
            The base name, or ``<base>-<suffix>`` if the base is taken.
        """
        name = base = base_name(task_text)
        while name in self._used:
            name = f"{base}-{self._suffix()}"
        self._used.add(name)
        return name

    def reset(self) -> None:
        """Forget every name issued so far."""
        self._used.clear()

    def _suffix(self) -> str:
        return "".join(self._rng.choices(_SUFFIX_ALPHABET, k=SUFFIX_LENGTH))


_default_generator = NameGenerator()


def generate_agent_name(task_text: str) -> str:
    """Generate a name using the process-wide generator."""
    return _default_generator.generate(task_text)


def reset_used_names() -> None:
    """Reset the process-wide generator (useful for testing)."""
    _default_generator.reset()
