PROMPT = "prompt"
PROMPT_PREFIX = "prompt_prefix"
PROMPT_SUFFIX = "prompt_suffix"
TOOLS = "tools"
TOOL_DESCRIPTIONS = "tool_descriptions"
TOOL_NAMES = "tool_names"
OS_INDICES = "opensearch_indices"
EXAMPLES = "examples"
QUESTION = "question"
SCRATCHPAD = "scratchpad"
AGENT_SCRATCHPAD = "agent_scratchpad"
CHAT_HISTORY = "chat_history"
CONTEXT = "context"


def _p(name: str) -> str:
    return "${parameters." + name + "}"


AGENT_TEMPLATE_WITH_CONTEXT = (
    _p(PROMPT_PREFIX) + "\n"
    "Answer the following questions as best you can. Always try to answer question "
    "based on Context or Chat History first. If you find answer in Context or Chat "
    "History, no need to run action any more, just return the final answer.\n\n"
    + _p(CONTEXT) + "\n"
    + _p(CHAT_HISTORY) + "\n"
    + _p(TOOL_DESCRIPTIONS) + "\n"
    + _p(OS_INDICES) + "\n"
    + _p(EXAMPLES) + "\n"
    "Use the style of Thought, Action, Observation as demonstrated below to answer "
    "the questions (Do NOT add sequence number after Action and Action Input):\n\n"
    "Question: the input question you must answer\n"
    "Thought: you should always think about what to do. If you can find final answer "
    "from given Context, just give the final answer, NO need to run Action any more,\n"
    "Action: the action to take, should be one of these tool names: ["
    + _p(TOOL_NAMES) + "]. Don't any any words or punctuation before or after. \n"
    "Action Input: the input to the action\n"
    "Observation: the result of the action\n"
    "... (this Thought/Action/Action Input/Observation can repeat N times)\n"
    "Thought: I now know the final answer\n"
    "Final Answer: the final answer to the original input question\n\n"
    "Begin!\n\n"
    "Question: " + _p(QUESTION) + "\n"
    "Thought: " + _p(SCRATCHPAD) + "\n"
    + _p(PROMPT_SUFFIX) + "\n"
)

DEFAULT_TOOLS_PREFIX = "You have access to the following tools defined in <tools>: \n<tools>\n"
DEFAULT_TOOLS_SUFFIX = "</tools>\n"
DEFAULT_TOOL_PREFIX = "<tool>\n"
DEFAULT_TOOL_SUFFIX = "\n</tool>\n"

DEFAULT_INDICES_PREFIX = (
    "You have access to the following OpenSearch Index defined in <opensearch_indexes>: \n"
    "<opensearch_indexes>\n"
)
DEFAULT_INDICES_SUFFIX = "</opensearch_indexes>\n"
DEFAULT_INDEX_PREFIX = "<index>\n"
DEFAULT_INDEX_SUFFIX = "\n</index>\n"

DEFAULT_EXAMPLES_PREFIX = (
    "You should follow and learn from examples defined in <examples>: \n<examples>\n"
)
DEFAULT_EXAMPLES_SUFFIX = "</examples>\n"
DEFAULT_EXAMPLE_PREFIX = "<example>\n"
DEFAULT_EXAMPLE_SUFFIX = "\n</example>\n"

CHAT_HISTORY_HEADER = "Below is Chat History between Human and AI in <chat_history>:\n"
