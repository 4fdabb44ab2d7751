"""Deterministic local responder, the last stage of the reply chain."""

import random
import re
from datetime import datetime
from typing import Callable, List, Optional

from ..models.context import BusinessContext
from .knowledge import lookup_fact


DIVISION_BY_ZERO = "Division by zero is undefined."
DEFAULT_NAME = "there"
DEFAULT_CURRENCY = "RUB"

MATH_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*([+\-*/×÷])\s*(\d+(?:\.\d+)?)\??$")

OPERATOR_WORDS = {
    "+": "plus",
    "-": "minus",
    "*": "times",
    "×": "times",
    "/": "divided by",
    "÷": "divided by",
}

IDENTITY_PATTERN = re.compile(r"\b(who are you|what are you|your name|introduce yourself)\b")
USER_PATTERN = re.compile(r"\b(who am i|my name|about me|my company|my business)\b")
BUSINESS_PATTERN = re.compile(r"\b(business|deals|sales|revenue|performance|metrics|customers|crm)\b")
TIME_PATTERN = re.compile(r"\b(what time|current time|today|date|now)\b")
CAPABILITY_PATTERN = re.compile(r"\b(what can you|help me|capabilities|functions|features)\b")
GREETING_PATTERN = re.compile(
    r"^(hi|hello|hey|good morning|good afternoon|good evening|greetings|привет|здравствуйте)(\s|!|\?|,|\.|$)"
)


def format_number(value: float) -> str:
    """Shortest textual form: integral values drop the trailing ``.0``."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def evaluate_arithmetic(message: str) -> Optional[str]:
    """
    Evaluate a two-operand expression such as ``30+30?`` or ``100 / 5``.

    Returns None when the message is not an expression. Division by zero
    yields a fixed sentence instead of raising.
    """
    match = MATH_PATTERN.match(message.lower().strip())
    if not match:
        return None

    left = float(match.group(1))
    operator = match.group(2)
    right = float(match.group(3))

    if operator == "+":
        result = left + right
    elif operator == "-":
        result = left - right
    elif operator in ("*", "×"):
        result = left * right
    else:
        if right == 0:
            return DIVISION_BY_ZERO
        result = left / right

    return (
        f"{format_number(left)} {OPERATOR_WORDS[operator]} {format_number(right)} "
        f"equals {format_number(result)}."
    )


class LocalResponder:
    """
    Rule-table responder that always returns a non-empty reply.

    Rules run in order: arithmetic, factual lookup, identity, user, business,
    time, capability and greeting detectors, then a randomized fallback from
    a fixed pool. The random source and the clock are injectable.
    """

    def __init__(
        self,
        assistant_name: str = "Oraclio AI",
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.assistant_name = assistant_name
        self.rng = rng or random.Random()
        self.clock = clock

    def respond(self, message: str, context: BusinessContext) -> str:
        text = message.lower().strip()
        name = context.first_name() or DEFAULT_NAME
        company = context.company_name or "your company"
        summary = context.sales_summary()
        deals = int(summary.get("deals") or 0)
        revenue = summary.get("revenue") or 0
        currency = summary.get("currency") or DEFAULT_CURRENCY

        arithmetic = evaluate_arithmetic(text)
        if arithmetic:
            return arithmetic

        fact = lookup_fact(text)
        if fact:
            return fact

        if IDENTITY_PATTERN.search(text):
            return (
                f"I'm {self.assistant_name}, an intelligent business assistant. I can help you with business "
                "analysis, answer questions, do calculations, and have conversations about various topics."
            )

        if USER_PATTERN.search(text):
            return (
                f"You're {name} from {company}. I can see you have {deals} deals worth "
                f"{revenue} {currency}. What would you like to know?"
            )

        if BUSINESS_PATTERN.search(text):
            return self._choose(self._business_insights(name, deals, revenue, currency))

        if TIME_PATTERN.search(text):
            now = self.clock()
            return f"It's currently {now:%H:%M:%S} on {now:%Y-%m-%d}. How can I help you today?"

        if CAPABILITY_PATTERN.search(text):
            return (
                "I can help with: business analysis, mathematical calculations, answering factual questions, "
                "general conversation, and analyzing your business data. What would you like to explore?"
            )

        if GREETING_PATTERN.match(text):
            return self._choose(self.greetings(name))

        return self._choose(self._unknown_answers(name, deals, revenue, currency))

    @staticmethod
    def greetings(name: str) -> List[str]:
        return [
            f"Hey {name}! Great to see you. How can I help today?",
            f"Hello {name}! What's on your mind?",
            f"Hi {name}! Ready to dive into some business insights or just chat?",
        ]

    @staticmethod
    def _business_insights(name: str, deals: int, revenue, currency: str) -> List[str]:
        if deals == 0:
            return [
                f"{name}, I don't see any deals in your CRM yet. Connect Bitrix24 and I can break down "
                "your pipeline, revenue and top customers.",
                f"There's no deal data to analyze yet, {name}. Once your CRM is connected I'll track "
                "revenue and deal flow for you.",
            ]
        average = round(revenue / deals)
        return [
            f"{name}, looking at your {deals} deals worth {revenue} {currency}, your average deal value "
            f"is {average} {currency}.",
            f"Your business performance shows {deals} active deals. With {revenue} {currency} in pipeline "
            "value, you're tracking well for growth.",
            f"Based on your CRM data, you have {deals} opportunities totaling {revenue} {currency}. "
            "What specific metrics would you like to explore?",
        ]

    @staticmethod
    def _unknown_answers(name: str, deals: int, revenue, currency: str) -> List[str]:
        return [
            f"Sorry {name}, I'm not trained in that area yet. I can help with business analysis, "
            "mathematics, geography, science, or other topics from my knowledge base.",
            "I don't know the answer to that question. I specialize in business data, factual knowledge, "
            "and general topics. Try asking me something else!",
            f"I'm not trained to answer those types of questions, {name}. I'm best at analyzing your "
            "business data, mathematical calculations, and factual questions.",
            f"That's outside my knowledge area for now. I can help with your {deals} deals worth "
            f"{revenue} {currency}, mathematics, geography, or scientific facts.",
            "I don't know the answer to that question. My expertise includes business analytics, basic "
            "sciences, geography, and mathematics. What else interests you?",
        ]

    def _choose(self, pool: List[str]) -> str:
        return self.rng.choice(pool)
