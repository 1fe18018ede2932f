"""
PORTFOLIO ASSISTANT TEST SCRIPT - Chat and Demo Console
=======================================================

PURPOSE:
This is a command-line test interface for the portfolio assistant API.
It lets you chat with the assistant and fire the performance demos without
running the frontend.

USAGE:
    python test.py

    Make sure the server is running first: python run.py

COMMANDS:
    /cache <flightId> [on|off]   - Caching demo (default: cache on)
    /search <query> [--linear]   - Log search demo (default: indexed)
    /batch <count> [on|off]      - Batch demo (default: batched)
    /realtime <eventId> [push|poll]
    /history                     - View the conversation kept by this client
    /clear                       - Forget the conversation
    /quit or /exit               - Exit the test interface

Anything else is sent to /chat together with the last 6 turns, just like the
chat widget does.
"""

import requests

# -----------------------------------------------------------------------------
# CONFIGURATION
# -----------------------------------------------------------------------------
# API base URL; change if your server runs on a different host or port.
BASE_URL = "http://localhost:8000"
HISTORY_WINDOW = 6
# The conversation is owned by the client; the server never stores it.
HISTORY = []


# -----------------------------------------------------------------------------
# UI HELPERS
# -----------------------------------------------------------------------------

def print_header():
    print("\n" + "="*60)
    print("Portfolio Assistant - Chat & Performance Demos")
    print("="*60)
    print("\nCommands:")
    print("  /cache <flightId> [on|off]")
    print("  /search <query> [--linear]")
    print("  /batch <count> [on|off]")
    print("  /realtime <eventId> [push|poll]")
    print("  /history - See conversation")
    print("  /clear - Forget conversation")
    print("  /quit - Exit")
    print("="*60 + "\n")


def get_user_input():
    try:
        return input("\nYou: ").strip()
    except (KeyboardInterrupt, EOFError):
        return None


# -----------------------------------------------------------------------------
# API CALLS
# -----------------------------------------------------------------------------

def _post(endpoint, payload, timeout=30):
    """POST JSON and return (ok, data). Errors come back as a printable string in data."""
    try:
        response = requests.post(f"{BASE_URL}{endpoint}", json=payload, timeout=timeout)
    except requests.exceptions.ConnectionError:
        return False, "Cannot connect to backend. Start it with: python run.py"
    except requests.exceptions.Timeout:
        return False, "Request timed out."

    try:
        data = response.json()
    except ValueError:
        return False, f"Error: {response.status_code} - {response.text}"

    if response.status_code == 200 and data.get("success"):
        return True, data
    message = data.get("error", "Unknown error")
    if "receivedType" in data:
        message += f" ({data['receivedType']!r})"
    return False, f"Error {response.status_code}: {message}"


def send_message(message):
    """Send a chat message with the recent history; record both turns on success."""
    ok, data = _post("/chat", {"message": message, "conversationHistory": HISTORY[-HISTORY_WINDOW:]})
    if not ok:
        return data
    HISTORY.append({"role": "user", "content": message})
    HISTORY.append({"role": "assistant", "content": data["response"], "metadata": data["metadata"]})
    meta = data["metadata"]
    return f"{data['response']}\n   [{meta['intent']} | {meta['model']} | {meta['processingTime']}ms]"


def run_demo(args):
    """Translate a slash command into a /demo request and format the result."""
    command, rest = args[0], args[1:]

    if command == "/cache" and rest:
        use_cache = not (len(rest) > 1 and rest[1] == "off")
        ok, data = _post("/demo", {"type": "caching", "flightId": rest[0], "useCache": use_cache})
        if not ok:
            return data
        return f"{'HIT ' if data['cacheHit'] else 'MISS'} {data['data']['flightId']} gate {data['data']['gate']} in {data['elapsedMs']:.1f}ms ({data['source']})"

    if command == "/search" and rest:
        use_indexed = "--linear" not in rest
        query = " ".join(word for word in rest if word != "--linear")
        ok, data = _post("/demo", {"type": "search", "query": query, "useIndexed": use_indexed})
        if not ok:
            return data
        where = f"line {data['position']}" if data["found"] else "not found"
        return f"{data['algorithm']} {data['complexity']}: {where}, {data['comparisons']} comparisons over {data['totalEntries']} entries"

    if command == "/batch" and rest:
        use_batch = not (len(rest) > 1 and rest[1] == "off")
        try:
            count = int(rest[0])
        except ValueError:
            return "Count must be a number"
        ok, data = _post("/demo", {"type": "batch", "count": count, "useBatch": use_batch}, timeout=60)
        if not ok:
            return data
        return f"{data['method']}: {data['itemCount']} items in {data['totalElapsedMs']:.0f}ms using {data['connectionsUsed']} connection(s)"

    if command == "/realtime" and rest:
        push = not (len(rest) > 1 and rest[1] == "poll")
        try:
            event_id = int(rest[0])
        except ValueError:
            return "Event id must be a number"
        ok, data = _post("/demo", {"type": "realtime", "eventId": event_id, "useWebSocket": push})
        if not ok:
            return data
        return f"{data['method']}: value {data['value']}, latency {data['latencyMs']:.0f}ms, server load {data['serverLoadPercent']}%"

    return f"Usage error: {' '.join(args)}"


def format_history():
    if not HISTORY:
        return "No messages in this conversation"
    output = f"\nConversation ({len(HISTORY)} messages):\n" + "-" * 60 + "\n"
    for i, msg in enumerate(HISTORY, 1):
        role = "You" if msg["role"] == "user" else "Assistant"
        output += f"{i}. {role}: {msg['content']}\n"
    return output + "-" * 60


# -----------------------------------------------------------------------------
# MAIN LOOP
# -----------------------------------------------------------------------------

def main():
    print_header()

    while True:
        user_input = get_user_input()
        if user_input is None or user_input in ["/quit", "/exit"]:
            print("\nGoodbye!")
            break
        if not user_input:
            continue

        if user_input == "/history":
            print(format_history())
        elif user_input == "/clear":
            HISTORY.clear()
            print("\nConversation cleared.")
        elif user_input.startswith("/"):
            print(run_demo(user_input.split()))
        else:
            print(f"Assistant: {send_message(user_input)}")


# Run the interactive loop when this file is executed (python test.py).
if __name__ == "__main__":
    main()
