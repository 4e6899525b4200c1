# liftlog/utils/helpers.py

import json


def clean_response(response_text):
    """
    Clean the response text to extract JSON by removing Markdown code block delimiters.
    """
    text = response_text.strip()
    if text.startswith("```") and text.endswith("```"):
        lines = text.split('\n')
        if len(lines) >= 3:
            return '\n'.join(lines[1:-1])
    return text


def parse_json_object(response_text):
    """
    Parse a model reply that should hold a single JSON object.

    Raises ValueError when the text is not JSON or not an object.
    """
    data = json.loads(clean_response(response_text))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def normalize_name(name):
    """Case- and whitespace-insensitive key for matching exercise names."""
    return " ".join(name.split()).casefold()
