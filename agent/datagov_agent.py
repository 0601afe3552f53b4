# =============================================================================
# agent/datagov_agent.py - Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the Google ADK agent that answers catalog questions by calling
#   the Data.gov MCP server.
#
# HOW IT FITS TOGETHER:
#
#   ┌──────────────────────────────┐   stdio (MCP)   ┌─────────────────────┐
#   │  Google ADK Agent            │ ──────────────▶ │  FastMCP Server     │
#   │  prompt + LiteLlm model      │                 │  (tools/mcp_server) │
#   └──────────────────────────────┘                 └─────────────────────┘
#                                                               │ HTTPS
#                                                               ▼
#                                                    catalog.data.gov/api/3
#
# MCP CONNECTION:
#   ADK starts the server as a subprocess using the SAME interpreter that
#   runs the agent (sys.executable), so the subprocess sees the same
#   installed packages.  The server's environment inherits DATAGOV_*
#   variables, so a custom base URL applies to both sides.
#
# MODEL:
#   Any LiteLlm model string works; the default routes GPT-4o through
#   OpenRouter (LiteLlm reads OPENROUTER_API_KEY from the environment).
#   Override with DATAGOV_AGENT_MODEL.
# =============================================================================

import os
import sys
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_catalog_assistant_prompt
from datagov.config import Settings, load_settings

AGENT_NAME = "datagov_catalog_assistant"


def server_parameters() -> StdioServerParameters:
    """How ADK launches the MCP server subprocess."""
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=project_root,
        env=dict(os.environ),
    )


def create_agent(settings: Optional[Settings] = None) -> Agent:
    """Create the catalog assistant.

    Args:
        settings: Runtime settings; read from the environment when omitted.

    Returns:
        A configured Google ADK Agent wired to the Data.gov MCP tools.
    """
    settings = settings or load_settings()

    mcp_tools = MCPToolset(connection_params=server_parameters())

    return Agent(
        name=AGENT_NAME,
        model=LiteLlm(model=settings.agent_model),
        instruction=get_catalog_assistant_prompt(),
        tools=[mcp_tools],
    )
