"""Library editing - category and word operations over a Library value.

All functions return a new Library and leave their input untouched.
"""

import itertools
import re
import time
from dataclasses import replace
from typing import List, Optional, Tuple

from smart_dictation.core import (
    UNCATEGORIZED,
    Library,
    NotFoundError,
    ReservedCategoryError,
    WordEntry,
)

_id_counter = itertools.count()

# "apple, 苹果" / "apple\t苹果" / "apple = 苹果"
_PAIR_SEPARATOR = re.compile(r"\s*[,，\t=]\s*")


def new_word_id(prefix: Optional[str] = None) -> str:
    """Timestamp-based id, e.g. ``gen-1700000000000-3`` for generated words."""
    now = int(time.time() * 1000)
    n = next(_id_counter)
    return f"{prefix}-{now}-{n}" if prefix else f"{now}-{n}"


def all_words(library: Library) -> List[WordEntry]:
    return [word for words in library.values() for word in words]


def count_words(library: Library) -> int:
    return sum(len(words) for words in library.values())


def find_word(library: Library, word_id: str) -> Optional[Tuple[str, int]]:
    """Locate a word by id. Returns (category, index) of the first match."""
    for category, words in library.items():
        for idx, word in enumerate(words):
            if word.id == word_id:
                return category, idx
    return None


def add_word(library: Library, word: WordEntry, category: Optional[str] = None) -> Library:
    """Add a copy of word to category, creating the category if needed.

    Words whose English text already exists in the category (ignoring case)
    are not added again.
    """
    target = category or UNCATEGORIZED
    existing = library.get(target, [])
    wanted = word.source_text.lower()
    if any(w.source_text.lower() == wanted for w in existing):
        return library

    updated = dict(library)
    updated[target] = [*existing, replace(word, category=target)]
    return updated


def add_category(library: Library, name: str) -> Library:
    if not name.strip() or name in library:
        return library
    updated = dict(library)
    updated[name] = []
    return updated


def delete_category(library: Library, name: str) -> Library:
    """Delete a category and every word in it.

    Raises:
        ReservedCategoryError: For the default category.
        NotFoundError: If the category does not exist.
    """
    if name == UNCATEGORIZED:
        raise ReservedCategoryError(f"Category '{UNCATEGORIZED}' cannot be deleted")
    if name not in library:
        raise NotFoundError(f"Category not found: {name}")
    return {category: words for category, words in library.items() if category != name}


def remove_word(library: Library, category: str, word_id: str) -> Library:
    if category not in library:
        raise NotFoundError(f"Category not found: {category}")
    updated = dict(library)
    updated[category] = [w for w in library[category] if w.id != word_id]
    return updated


def update_word(
    library: Library,
    word_id: str,
    source_text: Optional[str] = None,
    target_text: Optional[str] = None,
) -> Library:
    """Edit the content fields of a word. SRS fields are left alone.

    Raises:
        NotFoundError: If no word has this id.
    """
    location = find_word(library, word_id)
    if location is None:
        raise NotFoundError(f"Word not found: {word_id}")
    category, idx = location

    word = library[category][idx]
    changes = {}
    if source_text is not None:
        changes["source_text"] = source_text.strip()
    if target_text is not None:
        changes["target_text"] = target_text.strip()

    updated = dict(library)
    words = list(library[category])
    words[idx] = replace(word, **changes)
    updated[category] = words
    return updated


def parse_word_list(text: str, prefix: str = "paste") -> List[WordEntry]:
    """Parse pasted text with one ``english, chinese`` pair per line.

    Lines without a separator are kept with an empty translation; blank
    lines are skipped.
    """
    words = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        parts = _PAIR_SEPARATOR.split(line, maxsplit=1)
        english = parts[0].strip()
        chinese = parts[1].strip() if len(parts) > 1 else ""
        if not english and not chinese:
            continue
        words.append(WordEntry(id=new_word_id(prefix), source_text=english, target_text=chinese))
    return words
