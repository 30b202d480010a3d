"""
Deterministic local review summary, used when the remote summary is
unavailable or unusable.

Same input always gives the same output: the takeaway is picked from a fixed
template by average rating, pros/cons are the first sentences of positive and
negative reviews, and topics come from per-category keyword lists.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from catalog_client.contracts.models import Review, ReviewSummary, average_rating

SUPPORTED_LANGUAGES = ("en", "tr", "es")

HAPPY_THRESHOLD = 4.2
UNHAPPY_THRESHOLD = 2.8
MAX_SNIPPETS = 3
MAX_TOPICS = 5
SNIPPET_LENGTH = 90

TAKEAWAYS: Dict[str, Dict[str, str]] = {
    "en": {
        "happy": "Reviewers are very positive: {count} reviews average {avg}/5.",
        "unhappy": "Reviewers are mostly disappointed: {count} reviews average {avg}/5.",
        "generic": "Reviewers report mixed experiences across {count} reviews averaging {avg}/5.",
    },
    "tr": {
        "happy": "Kullanıcılar oldukça memnun: {count} yorumun ortalaması {avg}/5.",
        "unhappy": "Kullanıcılar çoğunlukla memnun değil: {count} yorumun ortalaması {avg}/5.",
        "generic": "{count} yorumda farklı deneyimler paylaşılıyor, ortalama {avg}/5.",
    },
    "es": {
        "happy": "Los usuarios están muy satisfechos: {count} reseñas con una media de {avg}/5.",
        "unhappy": "La mayoría de los usuarios está decepcionada: {count} reseñas con una media de {avg}/5.",
        "generic": "Las reseñas muestran experiencias variadas: {count} reseñas con una media de {avg}/5.",
    },
}

TOPIC_LABELS: Dict[str, Dict[str, str]] = {
    "battery": {"en": "Battery", "tr": "Batarya", "es": "Batería"},
    "performance": {"en": "Performance", "tr": "Performans", "es": "Rendimiento"},
    "price": {"en": "Price", "tr": "Fiyat", "es": "Precio"},
    "build": {"en": "Build quality", "tr": "Malzeme kalitesi", "es": "Calidad de construcción"},
    "camera": {"en": "Camera", "tr": "Kamera", "es": "Cámara"},
    "delivery": {"en": "Delivery", "tr": "Kargo", "es": "Envío"},
    "packaging": {"en": "Packaging", "tr": "Paketleme", "es": "Embalaje"},
    "comfort": {"en": "Comfort", "tr": "Konfor", "es": "Comodidad"},
    "usability": {"en": "Usability", "tr": "Kullanım", "es": "Usabilidad"},
}

_PRICE = ["price", "fiyat", "precio", "expensive", "pahalı", "caro", "value"]
_DELIVERY = ["delivery", "shipping", "kargo", "envío"]
_PACKAGING = ["package", "packaging", "paket", "embalaje"]

TOPIC_KEYWORDS: Dict[str, Dict[str, List[str]]] = {
    "electronics": {
        "battery": ["battery", "batarya", "pil", "charge", "şarj", "bateria", "carga"],
        "performance": ["performance", "speed", "fast", "performans", "hız", "rapido", "rendimiento"],
        "camera": ["camera", "kamera", "cámara", "photo", "foto"],
        "build": ["build", "quality", "malzeme", "kalite", "construction", "construcción"],
        "price": _PRICE,
        "delivery": _DELIVERY,
        "packaging": _PACKAGING,
        "usability": ["usability", "easy", "kullanım", "kolay", "usabilidad"],
    },
    "clothing": {
        "comfort": ["comfortable", "comfort", "konfor", "rahat", "comodidad"],
        "build": ["fabric", "quality", "kumaş", "kalite", "tela", "calidad"],
        "price": _PRICE,
        "delivery": _DELIVERY,
        "packaging": _PACKAGING,
        "usability": ["fit", "size", "beden", "uyum", "talla", "ajuste"],
    },
    "books": {
        "usability": ["translation", "çeviri", "traducción", "writing", "yazım", "prose", "estilo"],
        "build": ["cover", "kapak", "paper", "kağıt", "portada", "papel"],
        "price": _PRICE,
        "delivery": _DELIVERY,
        "packaging": _PACKAGING,
    },
    "default": {
        "build": ["quality", "kalite", "calidad", "material", "malzeme"],
        "price": _PRICE,
        "delivery": _DELIVERY,
        "packaging": _PACKAGING,
        "usability": ["easy", "kolay", "usabilidad", "usable"],
    },
}

_SENTENCE_SPLIT = re.compile(r"[.!?\n]")


def normalize_language(lang: Optional[str]) -> str:
    value = (lang or "").strip().lower()
    return value if value in SUPPORTED_LANGUAGES else "en"


def first_sentence(text: str) -> Optional[str]:
    sentence = _SENTENCE_SPLIT.split(text.strip(), maxsplit=1)[0].strip()
    if not sentence:
        return None
    if len(sentence) > SNIPPET_LENGTH:
        sentence = sentence[:SNIPPET_LENGTH] + "…"
    return sentence


def _keywords_for(category: Optional[str]) -> Dict[str, List[str]]:
    c = (category or "").lower()
    for name, keywords in TOPIC_KEYWORDS.items():
        if name != "default" and name in c:
            return keywords
    return TOPIC_KEYWORDS["default"]


def top_topics(comments: Iterable[str], lang: str = "en", category: Optional[str] = None) -> List[str]:
    """Topic labels mentioned in the comments, most mentioned first."""
    keywords = _keywords_for(category)
    counts = {topic: 0 for topic in keywords}
    for comment in comments:
        text = comment.lower()
        for topic, words in keywords.items():
            if any(word in text for word in words):
                counts[topic] += 1

    ranked = sorted((t for t, n in counts.items() if n > 0), key=lambda t: -counts[t])
    return [TOPIC_LABELS[t].get(lang, TOPIC_LABELS[t]["en"]) for t in ranked[:MAX_TOPICS]]


def takeaway_for(avg: float, count: int, lang: str = "en") -> str:
    if avg >= HAPPY_THRESHOLD:
        kind = "happy"
    elif avg <= UNHAPPY_THRESHOLD:
        kind = "unhappy"
    else:
        kind = "generic"
    return TAKEAWAYS[normalize_language(lang)][kind].format(count=count, avg=f"{avg:.1f}")


def local_summary(reviews: Iterable[Review], lang: str = "en", category: Optional[str] = None) -> ReviewSummary:
    lang = normalize_language(lang)
    usable = [r for r in reviews if r.comment and r.comment.strip()]
    if not usable:
        return ReviewSummary()

    avg = average_rating(r.rating for r in usable)

    pros: List[str] = []
    cons: List[str] = []
    for review in usable:
        snippet = first_sentence(review.comment)
        if snippet is None:
            continue
        if review.rating >= 4 and len(pros) < MAX_SNIPPETS and snippet not in pros:
            pros.append(snippet)
        elif review.rating <= 2 and len(cons) < MAX_SNIPPETS and snippet not in cons:
            cons.append(snippet)

    return ReviewSummary(
        takeaway=takeaway_for(avg, len(usable), lang),
        pros=pros,
        cons=cons,
        top_topics=top_topics((r.comment for r in usable), lang, category),
        review_count_used=len(usable),
        average_rating=avg,
    )
