"""NoteTube MCP Server — expose video notes as a tool for any MCP-capable agent.

Run:
    python -m notetube.mcp_server

Or add to your MCP config (e.g., Claude Desktop, Cursor):
    {
      "mcpServers": {
        "notetube": {
          "command": "python",
          "args": ["-m", "notetube.mcp_server"],
          "env": {
            "OPENAI_API_KEY": "sk-..."
          }
        }
      }
    }
"""

from mcp.server.fastmcp import FastMCP

from .completion import CompletionClient, OpenAICompletionClient
from .config import Settings, load_settings
from .errors import NoteTubeError
from .schemas import ContentType, Intent
from .service import generate_notes

mcp = FastMCP("notetube")

_settings: Settings | None = None
_client: CompletionClient | None = None


def configure(settings: Settings, client: CompletionClient) -> None:
    global _settings, _client
    _settings = settings
    _client = client


@mcp.tool()
def video_notes(url: str, intent: str = "learn", content_type: str | None = None) -> str:
    """Turn a YouTube video's captions into notes.

    Args:
        url: YouTube video URL (watch, youtu.be or embed link)
        intent: learn (study notes), reference (quick lookup), action
            (step-by-step) or overview (one neutral sentence)
        content_type: Optional overview hint: educational or entertainment
    """
    if _client is None or _settings is None:
        return "error: notetube is not configured"
    try:
        parsed_intent = Intent(intent)
    except ValueError:
        return "error: intent must be learn, reference, action or overview"
    try:
        parsed_hint = ContentType(content_type) if content_type else None
    except ValueError:
        return "error: content_type must be educational or entertainment"
    try:
        result = generate_notes(url, parsed_intent, parsed_hint, client=_client, settings=_settings)
    except NoteTubeError as exc:
        return f"error: {exc.message}"
    return result.text


def main() -> None:
    settings = load_settings()
    configure(settings, OpenAICompletionClient.from_settings(settings))
    mcp.run()


if __name__ == "__main__":
    main()
