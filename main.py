# =============================================================================
# main.py - Interactive console for the Data.gov catalog assistant
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (OPENROUTER_API_KEY, DATAGOV_* settings)
#   2. Creates the ADK agent (agent/datagov_agent.py), which launches the
#      MCP server (tools/mcp_server.py) as a stdio subprocess
#   3. Reads questions from the console and streams each answer, printing
#      every tool call the agent makes along the way
#
# To run only the MCP server (e.g. for another MCP client), use:
#   python -m tools.mcp_server
# =============================================================================

import asyncio
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

# LiteLlm reads its API key from the environment when the agent is built,
# so .env must be loaded before the imports below are used.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.datagov_agent import create_agent
from datagov.operations import list_operations

APP_NAME = "datagov_assistant"
USER_ID = "console_user"
HELP_COMMANDS = ("tools", "help", "?")


def catalog_help() -> str:
    """Describe the tools the assistant can call, one block per tool."""
    lines = ["📚 The assistant can call these Data.gov tools:"]
    for op in list_operations():
        lines.append(f"\n  {op.name}: {op.description}")
        for spec in op.fields:
            flag = "required" if spec.required else "optional"
            lines.append(f"      - {spec.name} ({spec.type}, {flag}): {spec.description}")
    lines.append("\n  Raw files: datagov://resource/<percent-encoded url>")
    return "\n".join(lines)


def format_tool_call(name: str, args: Optional[Mapping[str, Any]]) -> str:
    """Render one tool call the way the console shows it: name(k=v, ...)."""
    rendered = ", ".join(f"{key}={value!r}" for key, value in (args or {}).items())
    return f"  🔧 Calling tool: {name}({rendered})"


async def run_agent():
    """Run the catalog assistant interactively until the user quits."""
    print("=" * 70)
    print("  DATA.GOV CATALOG ASSISTANT")
    print("  Powered by Google ADK + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask about open government data (e.g. 'air quality data for Ohio').")
    print("   (Type 'tools' to see what it can look up, 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        if user_input.lower() in HELP_COMMANDS:
            print(f"\n{catalog_help()}")
            continue

        user_message = types.Content(role="user", parts=[types.Part(text=user_input)])

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text
                    if getattr(part, "function_call", None):
                        print(format_tool_call(part.function_call.name, part.function_call.args))
                    if getattr(part, "function_response", None):
                        print(f"  📦 {part.function_response.name} returned")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
