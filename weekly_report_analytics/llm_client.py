"""
LLM client for free-text questions about a sheet's figures.

The model only sees the plain-text context built here; it never sees the
workbook.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable

from dotenv import load_dotenv

from .config import (
    ANALYST_SYSTEM_PROMPT,
    DATA_DIR,
    EMPTY_ANSWER,
    OPENAI_MAX_TOKENS,
    OPENAI_MODEL,
    OPENAI_TEMPERATURE,
)
from .formatting import format_currency, format_number, format_percent
from .models import SheetData

logger = logging.getLogger(__name__)

Answerer = Callable[[str, str], str]


class AIInsightError(Exception):
    """Raised when the Q&A backend fails to produce an answer."""


def _load_env(project_dir: str | Path = DATA_DIR) -> None:
    for d in [Path(project_dir), Path.cwd()]:
        env_file = d / ".env"
        if env_file.exists():
            load_dotenv(env_file)
            return


def get_api_key(project_dir: str | Path = DATA_DIR) -> str | None:
    _load_env(project_dir)
    key = os.getenv("OPENAI_API_KEY")
    if key and key.strip():
        return key.strip()
    return None


def build_question_context(sheet: SheetData) -> str:
    """Plain-text summary of a sheet handed to the model with the question.

    Requires at least two weekly records.
    """
    latest, previous = sheet.latest_week, sheet.previous_week
    if latest is None or previous is None:
        raise ValueError(f"Sheet '{sheet.sheet_name}' needs two weeks of data for Q&A")

    avg = sheet.thirteen_week_average
    if avg is not None:
        avg_text = (
            f"- AOA: {format_number(avg.associates_on_assignment)}\n"
            f"- Revenue: {format_currency(avg.total_sales)}\n"
            f"- GP%: {format_percent(avg.gross_profit_percent)}"
        )
    else:
        avg_text = "Not available"

    aoa_change = latest.associates_on_assignment - previous.associates_on_assignment
    return (
        f"You are analyzing staffing and financial data for {sheet.sheet_name}.\n"
        f"\n"
        f"Latest Week Data ({latest.week}):\n"
        f"- Associates on Assignment: {format_number(latest.associates_on_assignment)}\n"
        f"- Total Sales: {format_currency(latest.total_sales)}\n"
        f"- Gross Profit: {format_currency(latest.gross_profit)} "
        f"({format_percent(latest.gross_profit_percent)})\n"
        f"- Customers Billed: {format_number(latest.customers_billed)}\n"
        f"- Bill Rate: {format_currency(latest.bill_rate_per_hour)}/hour\n"
        f"- Pay Rate: {format_currency(latest.avg_hourly_pay_rate)}/hour\n"
        f"- Markup: {format_percent(latest.markup_percent)}\n"
        f"- Hours Billed: {format_number(latest.hours_billed)}\n"
        f"\n"
        f"Week over Week Changes:\n"
        f"- AOA Change: {format_number(aoa_change)}\n"
        f"- Revenue Change: {format_currency(latest.total_sales - previous.total_sales)}\n"
        f"- GP Change: {format_currency(latest.gross_profit - previous.gross_profit)}\n"
        f"\n"
        f"13 Week Average (if available):\n"
        f"{avg_text}\n"
    )


def generate_ai_insight(context: str, question: str, client: Any = None) -> str:
    """Answer a question about the given context with an OpenAI chat model.

    Parameters
    ----------
    context : Text from build_question_context().
    question : The user's free-text question.
    client : An OpenAI client. Built from OPENAI_API_KEY when omitted.

    Raises
    ------
    AIInsightError on a missing key or any API failure.
    """
    if client is None:
        api_key = get_api_key()
        if not api_key:
            raise AIInsightError("OPENAI_API_KEY not found. Add it to .env.")
        from openai import OpenAI

        client = OpenAI(api_key=api_key)

    messages = [
        {"role": "system", "content": ANALYST_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": (
                f"{context}\n\nQuestion: {question}\n\n"
                "Please provide a clear, concise answer based on this data. "
                "Focus on actionable insights."
            ),
        },
    ]

    try:
        response = client.chat.completions.create(
            model=OPENAI_MODEL,
            messages=messages,
            max_tokens=OPENAI_MAX_TOKENS,
            temperature=OPENAI_TEMPERATURE,
        )
    except Exception as exc:
        logger.exception("OpenAI request failed")
        raise AIInsightError(
            "Failed to get AI response. Please check your API key and try again."
        ) from exc

    choice = response.choices[0] if response.choices else None
    text = choice.message.content if choice is not None and choice.message else None
    if not text:
        return EMPTY_ANSWER
    return text.strip()


def ask_about_sheet(
    sheet: SheetData,
    question: str,
    answerer: Answerer = generate_ai_insight,
) -> str:
    """Build the sheet context and pass it with the question to answerer."""
    if not question or not question.strip():
        raise ValueError("Question must not be empty")
    context = build_question_context(sheet)
    logger.info("Asking about sheet '%s'", sheet.sheet_name)
    return answerer(context, question.strip())
