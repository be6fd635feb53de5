AVAILABLE_TOOLS = ["Bash", "Read", "Edit", "Write", "Glob", "Grep"]

STATUS_PROMPT = """Analyze this agent output. RESPOND WITH ONLY JSON, NO OTHER TEXT.

OUTPUT:
{output}

JSON format: {{"status": "working", "summary": "brief description"}}

Status values: "working" (processing), "needs_input" (waiting for user), "done" (completed)

The summary should be one or two short sentences.

CRITICAL: Output ONLY the JSON object, nothing else."""

INPUT_PROMPT = """Analyze this user input and clean it up into clear, actionable tasks.

INPUT:
{raw_input}

RESPOND WITH ONLY A JSON OBJECT. NO OTHER TEXT BEFORE OR AFTER.

JSON format:
{{"tasks": [{{"prompt": "Clear task description", "suggestedTools": ["Tool1"]}}], "clarificationNeeded": "optional question"}}

Available tools: {tools}

Rules:
- Clean up informal language into clear prompts
- Identify distinct tasks if multiple exist
- If input is too vague, return empty tasks with clarificationNeeded
- CRITICAL: Output ONLY valid JSON, nothing else"""


def format_status_prompt(output: str) -> str:
    return STATUS_PROMPT.format(output=output)


def format_input_prompt(raw_input: str) -> str:
    return INPUT_PROMPT.format(raw_input=raw_input, tools=", ".join(AVAILABLE_TOOLS))
