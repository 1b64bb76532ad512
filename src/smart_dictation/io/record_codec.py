"""Conversion between domain entities and their persisted JSON shape.

Field names follow the stored format (``english``/``chinese``,
``lastReviewed``, ``reviewInterval``, ``createdAt`` ...) so existing
browser exports load unchanged.
"""

from typing import Any, Dict, List

from smart_dictation.core import (
    DailyContent,
    DailyQuote,
    Library,
    MissedWord,
    TestRecord,
    User,
    UserData,
    WordEntry,
)


def word_to_dict(word: WordEntry) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": word.id,
        "english": word.source_text,
        "chinese": word.target_text,
    }
    if word.category is not None:
        data["category"] = word.category
    if word.last_reviewed_at is not None:
        data["lastReviewed"] = word.last_reviewed_at
    data["reviewInterval"] = word.review_interval_days
    data["proficiency"] = word.proficiency
    return data


def word_from_dict(data: Dict[str, Any]) -> WordEntry:
    return WordEntry(
        id=str(data["id"]),
        source_text=data.get("english", ""),
        target_text=data.get("chinese", ""),
        category=data.get("category"),
        last_reviewed_at=data.get("lastReviewed"),
        review_interval_days=data.get("reviewInterval") or 0,
        proficiency=data.get("proficiency") or 0,
    )


def library_to_dict(library: Library) -> Dict[str, List[Dict[str, Any]]]:
    return {category: [word_to_dict(w) for w in words] for category, words in library.items()}


def library_from_dict(data: Dict[str, Any]) -> Library:
    return {category: [word_from_dict(w) for w in words] for category, words in data.items()}


def record_to_dict(record: TestRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "date": record.date,
        "score": record.score,
        "total": record.total,
        "wrongWords": [
            {"english": m.source_text, "chinese": m.target_text} for m in record.wrong_words
        ],
    }


def record_from_dict(data: Dict[str, Any]) -> TestRecord:
    return TestRecord(
        id=str(data["id"]),
        date=data["date"],
        score=data["score"],
        total=data["total"],
        wrong_words=[
            MissedWord(source_text=m.get("english", ""), target_text=m.get("chinese", ""))
            for m in data.get("wrongWords", [])
        ],
    )


def user_data_to_dict(data: UserData) -> Dict[str, Any]:
    return {
        "library": library_to_dict(data.library),
        "history": [record_to_dict(r) for r in data.history],
    }


def user_data_from_dict(data: Dict[str, Any]) -> UserData:
    return UserData(
        library=library_from_dict(data.get("library", {})),
        history=[record_from_dict(r) for r in data.get("history", [])],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": user.id,
        "username": user.username,
        "createdAt": user.created_at,
        "isAdmin": user.is_admin,
    }
    if user.password is not None:
        data["password"] = user.password
    return data


def user_from_dict(data: Dict[str, Any]) -> User:
    username = data["username"]
    if not isinstance(username, str):
        raise TypeError(f"username must be a string, got {type(username).__name__}")
    return User(
        id=str(data["id"]),
        username=username,
        password=data.get("password"),
        created_at=data["createdAt"],
        is_admin=bool(data.get("isAdmin", False)),
    )


def daily_content_to_dict(content: DailyContent) -> Dict[str, Any]:
    return {
        "date": content.date,
        "quotes": [
            {"english": q.english, "chinese": q.chinese, "author": q.author}
            for q in content.quotes
        ],
    }


def daily_content_from_dict(data: Dict[str, Any]) -> DailyContent:
    return DailyContent(
        date=data["date"],
        quotes=[
            DailyQuote(english=q["english"], chinese=q["chinese"], author=q.get("author", ""))
            for q in data.get("quotes", [])
        ],
    )
