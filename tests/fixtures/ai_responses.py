"""
Reponses types de l'API de completion pour les tests des clients IA.
"""

import json

MATCH_JSON = {
    "matches": [
        {
            "video_file_id": "file_0123456789abcdef",
            "subtitle_file_id": "file_fedcba9876543210",
            "confidence": 0.92,
            "match_factors": ["filename_similarity", "episode_number"],
        }
    ],
    "confidence": 0.9,
    "reasoning": "Episode numbers align",
}

SCORE_JSON = {"score": 0.85, "factors": ["same_title"]}


def completion(content: str, usage: bool = True) -> dict:
    """Enveloppe chat/completions autour d'un texte de reponse."""
    body = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }
    if usage:
        body["usage"] = {"prompt_tokens": 120, "completion_tokens": 40, "total_tokens": 160}
    return body


MATCH_COMPLETION = completion(
    "Here is my analysis:\n```json\n" + json.dumps(MATCH_JSON) + "\n```\nHope this helps!"
)

SCORE_COMPLETION = completion(json.dumps(SCORE_JSON))
