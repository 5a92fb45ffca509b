"""OpenAI chat completions client."""

from prfill.errors import UpstreamError
from prfill.providers.base import ApiClient

SYSTEM_PROMPT = (
    "You are an assistant that writes precise and concise pull request descriptions using code diffs "
    "and optional given template. You always follow the template structure if provided. If no template "
    "is provided, create a concise PR description based on the code diff. Do not add any sections that "
    "are not present in the template. Always use markdown formatting where applicable. Remember be "
    "concise and to the point."
)

TEMPERATURE = 0.7


def build_messages(template: str, diff: str) -> list[dict]:
    """The two-message prompt. Template and diff go in verbatim, with no truncation."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"Here is the pull request template:\n{template}\n\nAnd here is the code diff:\n{diff}\n\n",
        },
    ]


class CompletionClient(ApiClient):
    def __init__(self, api_key: str, base_url: str = "https://api.openai.com/v1") -> None:
        super().__init__({"Authorization": f"Bearer {api_key}"})
        self.base_url = base_url.rstrip("/")

    def generate_description(self, template: str, diff: str, model: str) -> str:
        response = self._request(
            "POST",
            "/chat/completions",
            "generate PR description",
            json={"model": model, "messages": build_messages(template, diff), "temperature": TEMPERATURE},
        )
        try:
            choices = response.json().get("choices") or []
        except (ValueError, AttributeError) as exc:
            raise UpstreamError(response.status_code, "Unreadable response from completion API") from exc
        if not choices:
            raise UpstreamError(None, "No response content received from completion API")
        content = ((choices[0].get("message") or {}).get("content") or "").strip()
        if not content:
            raise UpstreamError(None, "Completion API returned an empty description")
        return content
