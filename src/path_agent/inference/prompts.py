"""
Prompt template for path inference.
"""
import json
from typing import Mapping

PATH_INFERENCE_PROMPT = """You resolve natural-language folder descriptions to filesystem paths.

User: {username}
Known base directories:
{known_dirs}

Request: "{query}"

Reply with a JSON array of absolute path strings, most likely first.
Reply with the JSON array only, no explanation. Reply [] if unsure.
Example: ["{example}"]"""


def build_path_prompt(query: str, known_dirs: Mapping[str, str], username: str = "user") -> str:
    """
    Build the inference prompt.
    
    :param query: Raw user query
    :param known_dirs: Label -> path mapping of base directories
    :param username: Account name of the user
    :return: Prompt text
    """
    lines = "\n".join(f"- {label}: {path}" for label, path in known_dirs.items())
    example = next(iter(known_dirs.values()), "/home/user/Desktop")
    return PATH_INFERENCE_PROMPT.format(
        username=username,
        known_dirs=lines or "- (none)",
        query=query.replace('"', "'"),
        example=json.dumps(example)[1:-1],
    )
