"""Shared constants for the Foundry samples."""

from pathlib import Path

# Project root = foundry-samples/
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Asset paths
ASSETS_DIR = PROJECT_ROOT / "assets"
DOCUMENTS_DIR = ASSETS_DIR / "documents"
RESULTS_DIR = PROJECT_ROOT / "results"

# ── Polling (single source of truth) ────────────────────────────────────────
POLL_INTERVAL_SECS = 1.0        # first sleep between status checks
POLL_BACKOFF = 1.5              # multiplier applied after every attempt
POLL_MAX_INTERVAL_SECS = 10.0   # cap for a single sleep
POLL_MAX_ATTEMPTS = 120         # non-terminal polls before giving up

# Run / vector store / evaluation lifecycles
RUN_TERMINAL_STATES = frozenset({"completed", "failed", "cancelled", "expired"})
VECTOR_STORE_TERMINAL_STATES = frozenset({"completed", "expired"})
EVALUATION_TERMINAL_STATES = frozenset({"completed", "failed", "canceled", "cancelled"})

NO_RESPONSE = "No response"

# ── Default SDK values ──────────────────────────────────────────────────────
DEFAULT_OPENAI_API_VERSION = "2024-10-21"
DEFAULT_INDEX_NAME = "my-search-index"
DEFAULT_INDEX_VERSION = "1.0"
DEFAULT_AI_SEARCH_CONNECTION = "my-ai-search-connection"
DEFAULT_AI_SEARCH_INDEX = "my-ai-search-index-name"

# Evaluator short name -> member of azure.ai.projects.models.EvaluatorIds
EVALUATORS = {
    "relevance": "RELEVANCE",
    "coherence": "COHERENCE",
    "fluency": "FLUENCY",
    "groundedness": "GROUNDEDNESS",
    "intent_resolution": "INTENT_RESOLUTION",
    "task_adherence": "TASK_ADHERENCE",
    "tool_call_accuracy": "TOOL_CALL_ACCURACY",
    "violence": "VIOLENCE",
}
DEFAULT_EVALUATORS = ("intent_resolution", "relevance", "coherence")

# ── Sample prompts ──────────────────────────────────────────────────────────
SIMPLE_AGENT_INSTRUCTIONS = (
    "You are a helpful assistant who explains complex topics in simple terms."
)
SIMPLE_AGENT_QUESTION = (
    "Explain how GPT models work in terms a 10-year-old would understand."
)

CAPITALS_AGENT_INSTRUCTIONS = (
    "You are an AI assistant specializing in knowledge of world capitals. "
    "Always provide accurate information about capital cities of countries. "
    "If you're not sure about an answer, acknowledge this rather than guessing."
)
CAPITALS_QUESTIONS = (
    "What is the capital of France?",
    "What is the capital of Japan?",
    "What is the capital of Canada?",
)

FILE_SEARCH_INSTRUCTIONS = (
    "You are an assistant that helps users find information in their documents. "
    "Use the search tool to look up relevant information in the uploaded files. "
    "If you find the information in the documents, cite the document name as your source."
)
FILE_SEARCH_QUESTIONS = (
    "What products does Contoso offer?",
    "What are the key features of the Surface Laptop?",
    "Tell me about Contoso's cloud security features.",
    "What is included in the Contoso Office Suite?",
)

DEPLOYMENT_SYSTEM_PROMPT = (
    "You are an AI assistant that provides information about Azure AI Foundry deployments. "
    "Here's information about a deployment named {name}:\n"
    "- Type: {type}\n"
    "- Model: {model}\n"
    "Please answer user questions about this deployment."
)
DEPLOYMENT_USER_PROMPT = "Tell me about this deployment"

CHAT_SYSTEM_PROMPT = "You are a helpful writing assistant"
CHAT_USER_PROMPT = "Write me a poem about flowers"

# ── LangChain sample ────────────────────────────────────────────────────────
COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"
LANGCHAIN_SYSTEM_PROMPT = (
    "You are an AI assistant with expertise in Azure AI Foundry projects. "
    "Use the available tools to help answer questions."
)
LANGCHAIN_PLAIN_PROMPT = "Tell me about the Azure SDK for Python"
LANGCHAIN_TOOL_PROMPTS = (
    "List all my available connections",
    "Tell me about my {deployment} deployment",
)
LANGCHAIN_MEMORY_MESSAGES = 10
LANGCHAIN_MAX_TOOL_ROUNDS = 5
