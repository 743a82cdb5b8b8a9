"""
Mock Interviewer Configuration
==============================

This file contains ALL configuration for the mock interview engine.
- User settings at the top (things users might want to change)
- Proctoring and scoring constants below (behavioural defaults)
- Internal constants at the bottom (technical defaults)
"""
import os
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# USER SETTINGS - Edit these to customize the interview engine
# =============================================================================

# REQUIRED: API key for the chat-completion gateway
ORACLE_API_KEY = None  # Or set ORACLE_API_KEY in the environment
ORACLE_BASE_URL = "https://ai.gateway.lovable.dev/v1"
ORACLE_MODEL = "google/gemini-2.5-flash"

# Storage
DATA_DIR = "./_interviews"
RESUME_DIR_NAME = "resumes"

# Camera / detection
CAMERA_INDEX = 0
CAMERA_WIDTH = 320
CAMERA_HEIGHT = 240
ENABLE_PROCTORING = True
DETECTOR_WEIGHTS = "yolov8n.pt"

# Logging
LOG_FILE = "./_interviews/interview.log"
LOG_LEVEL = "WARNING"  # console only; the log file always gets DEBUG


# =============================================================================
# PROCTORING & SCORING - The observable interview rules
# =============================================================================

QUESTIONS_PER_SESSION = 5

# Penalties are percentage points taken off the final score
TAB_SWITCH_PENALTY = 5
DEVICE_WARNING_PENALTY = 10

# Sampler timing (seconds)
SAMPLE_INTERVAL_SECONDS = 3.0
WARNING_DEBOUNCE_SECONDS = 5.0
DETECTION_CONFIDENCE = 0.5

SUSPICIOUS_OBJECTS = (
    "cell phone",
    "mobile phone",
    "book",
    "laptop",
    "remote",
    "tablet",
    "computer",
)

ROLES = {
    "software-engineer": "Software Engineer",
    "product-manager": "Product Manager",
    "data-analyst": "Data Analyst",
    "ux-designer": "UX Designer",
}

ROLE_CONTEXTS = {
    "software-engineer": "software engineering, coding, system design, algorithms, debugging, and technical problem-solving",
    "product-manager": "product management, roadmap planning, stakeholder communication, metrics-driven decisions, and product strategy",
    "data-analyst": "data analysis, SQL, Python, data visualization, statistical analysis, and deriving actionable insights from data",
    "ux-designer": "UX design, user research, wireframing, prototyping, usability testing, and creating intuitive user experiences",
}
DEFAULT_ROLE_CONTEXT = "general professional skills and competencies"

QUESTION_VARIANTS = ("behavioral", "technical", "situational", "problem-solving", "experience-based")
VARIETY_SEED_MODULUS = 10000

# Score labels, highest threshold first
SCORE_LABELS = (
    (80, "Excellent"),
    (60, "Good"),
    (40, "Fair"),
)
LOWEST_SCORE_LABEL = "Needs Improvement"


# =============================================================================
# INTERNAL CONSTANTS - Don't change these unless you know what you're doing
# =============================================================================

# Oracle sampling
QUESTION_TEMPERATURE = 0.95
QUESTION_TOP_P = 0.95
EVALUATION_TEMPERATURE = 0.3
COACHING_TEMPERATURE = 0.5
ORACLE_TIMEOUT = 60

# Fallback evaluation values used when the oracle reply is unusable
FALLBACK_SCORES = {
    "relevance": 70.0,
    "clarity": 70.0,
    "grammar": 75.0,
    "confidence": 65.0,
}
FALLBACK_FEEDBACK = "Good attempt! Consider providing more specific examples."
PADDING_FEEDBACK = "Consider elaborating more on your response."
MISSING_FEEDBACK = "Good effort!"

FILLER_QUESTION = "What unique perspective would you bring to our team?"
MIN_LINE_QUESTION_LENGTH = 10

# Dashboard
RECENT_SCORES_LIMIT = 10


# =============================================================================
# MAIN CONFIG OBJECT
# =============================================================================

@dataclass
class Config:
    """Main configuration object."""
    oracle_api_key: str
    oracle_base_url: str = ORACLE_BASE_URL
    oracle_model: str = ORACLE_MODEL
    oracle_timeout: int = ORACLE_TIMEOUT
    data_dir: str = DATA_DIR
    camera_index: int = CAMERA_INDEX
    camera_width: int = CAMERA_WIDTH
    camera_height: int = CAMERA_HEIGHT
    enable_proctoring: bool = ENABLE_PROCTORING
    detector_weights: str = DETECTOR_WEIGHTS
    sample_interval: float = SAMPLE_INTERVAL_SECONDS
    warning_debounce: float = WARNING_DEBOUNCE_SECONDS
    log_file: str = LOG_FILE
    log_level: str = LOG_LEVEL

    @property
    def resume_dir(self) -> str:
        return os.path.join(self.data_dir, RESUME_DIR_NAME)


def get_config() -> Config:
    """Load configuration."""
    api_key = os.getenv("ORACLE_API_KEY") or ORACLE_API_KEY
    if not api_key:
        raise ValueError("Please set ORACLE_API_KEY in config.py or as environment variable")

    data_dir = os.getenv("MOCK_INTERVIEWER_DATA_DIR") or DATA_DIR

    return Config(
        oracle_api_key=api_key,
        oracle_base_url=os.getenv("ORACLE_BASE_URL") or ORACLE_BASE_URL,
        oracle_model=os.getenv("ORACLE_MODEL") or ORACLE_MODEL,
        data_dir=data_dir,
        log_file=os.path.join(data_dir, "interview.log"),
    )
