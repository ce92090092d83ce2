"""Term tables for relevance, priority and lead scoring - tuned for AI hardware."""

from dataclasses import dataclass
from enum import Enum
from typing import List


class TermCategory(Enum):
    """Rule groups used by the lead scoring engine."""

    COMPETITOR_PROJECT = "competitor_project"  # Flagship open-source project
    COMPARISON = "comparison"  # Comparing frameworks
    PERFORMANCE = "performance"  # Benchmark-focused technical buyer
    FINANCIAL_PAIN = "financial_pain"  # Purchase intent
    ALTERNATIVE = "alternative"  # Actively looking to switch
    DECISION_MAKER = "decision_maker"  # Authority
    ENTERPRISE = "enterprise"  # Scale / B2B
    URGENT = "urgent"  # Urgent language
    TIME_BOUND = "time_bound"  # Deadlines


@dataclass(frozen=True)
class Term:
    """A single scoring phrase with its weight."""

    phrase: str
    weight: int
    category: TermCategory
    description: str = ""


FLAGSHIP_PROJECT = "tinygrad"

# === SOURCE RELEVANCE: forum + news aggregator ===

SUBREDDITS: List[str] = [
    "MachineLearning",
    "LocalLLaMA",
    "ArtificialIntelligence",
    "hardware",
    "buildapc",
]

FORUM_KEYWORDS: List[str] = [
    "NVIDIA", "GPU", "CUDA", "H100", "A100", "RTX", "GTX", "V100",
    "AI hardware", "ML training", "deep learning", "neural networks",
    "budget constraints", "expensive", "cost", "alternative", "alternatives",
    "training", "inference", "compute", "performance", "TPU", "tensor",
    "machine learning", "artificial intelligence", "model training",
    "data center", "cloud computing", "HPC", "high performance computing",
    "tinygrad", "pytorch", "tensorflow", "JAX", "MLX", "triton",
    "RISC-V", "open source", "hardware acceleration", "AI chips",
    "inference engine", "model optimization", "quantization", "pruning",
    "edge computing", "embedded AI", "custom silicon", "ASIC", "FPGA",
]

FORUM_PAIN_POINTS: List[str] = [
    "expensive", "cost", "budget", "price", "overpriced", "costly",
    "shortage", "scalper", "waitlist", "backorder", "out of stock",
    "slow", "performance", "bottleneck", "limitation", "issues",
    "problem", "struggling", "difficult", "challenge", "frustrating",
    "can't afford", "too expensive", "broke", "tight budget",
]

# === SOURCE RELEVANCE: B2B social network ===

LINKEDIN_KEYWORDS: List[str] = [
    # AI frameworks & tools
    "tinygrad", "pytorch", "tensorflow", "JAX", "MLX", "triton", "mojo",
    "huggingface", "transformers", "llama", "mistral", "claude", "openai",
    "anthropic", "stability ai", "midjourney", "runway",
    # Hardware pain points
    "NVIDIA shortage", "GPU shortage", "H100 shortage", "A100 expensive",
    "CUDA licensing", "GPU costs", "hardware budget", "compute costs",
    "cloud bills", "AWS costs", "Azure costs", "GCP costs",
    "GPU availability", "supply chain issues", "procurement delays",
    # Alternative solutions
    "alternatives to NVIDIA", "GPU alternatives", "NVIDIA competitors",
    "custom silicon", "ASIC development", "FPGA solutions",
    "RISC-V processors", "open source hardware", "hardware acceleration",
    "AI chips", "inference acceleration", "edge computing",
    # Decision makers
    "CTO", "VP Engineering", "Head of AI", "ML Engineering Manager",
    "Director of Data Science", "Chief AI Officer", "AI Infrastructure Lead",
    "MLOps Engineer", "DevOps Lead", "Platform Engineering",
    # Business signals
    "scaling AI", "production deployment", "enterprise AI", "AI strategy",
    "ML infrastructure", "model deployment", "inference optimization",
    "cost optimization", "performance optimization", "ROI analysis",
]

LINKEDIN_PAIN_POINTS: List[str] = [
    # Financial
    "too expensive", "over budget", "cost prohibitive", "can't afford",
    "budget constraints", "ROI concerns", "cost analysis", "price comparison",
    # Technical
    "performance issues", "bottlenecks", "slow training", "memory limitations",
    "scaling problems", "deployment challenges", "integration issues",
    # Supply chain
    "out of stock", "long lead times", "supply shortage", "procurement delays",
    "vendor issues", "availability problems", "waiting list",
    # Strategic
    "vendor lock-in", "dependency concerns", "flexibility needed",
    "open source preference", "control requirements", "customization needs",
]

LINKEDIN_SEARCH_TERMS: List[str] = [
    "tinygrad vs pytorch performance",
    "NVIDIA alternatives 2024",
    "AI hardware procurement challenges",
    "GPU shortage impact business",
    "open source AI acceleration",
    "custom AI chip development",
    "edge AI deployment costs",
    "ML infrastructure optimization",
    "AI compute budget planning",
    "hardware acceleration ROI",
    "CTO AI infrastructure strategy",
    "VP Engineering hardware decisions",
    "AI budget planning 2024",
    "enterprise AI deployment",
    "ML platform evaluation",
    "AI hardware vendor selection",
]

# === SOURCE RELEVANCE: high-engagement social network ===

TWITTER_KEYWORDS: List[str] = [
    # Viral AI topics
    "tinygrad", "pytorch", "tensorflow", "JAX", "MLX", "triton", "mojo",
    "huggingface", "transformers", "llama", "mistral", "claude",
    "openai", "anthropic", "stability ai", "midjourney",
    # Cost complaints
    "NVIDIA expensive", "GPU prices", "H100 cost", "A100 pricing",
    "CUDA expensive", "GPU shortage", "can't afford GPU",
    "cloud costs", "AWS bill", "compute budget", "hardware budget",
    # Alternative hunting
    "NVIDIA alternative", "GPU alternative", "cheaper than NVIDIA",
    "open source AI", "custom silicon", "RISC-V", "FPGA",
    "AI chip startup", "hardware acceleration", "edge computing",
    # Developer pain
    "CUDA problems", "memory issues", "training slow", "inference slow",
    "optimization needed", "performance bottleneck", "scaling issues",
    "deployment challenges", "model optimization", "quantization",
    # Enterprise
    "enterprise AI", "production ML", "AI infrastructure", "MLOps",
    "AI strategy", "CTO", "VP Engineering", "Head of AI",
    "startup funding", "Series A", "Series B", "AI investment",
]

TWITTER_PAIN_POINTS: List[str] = [
    # Financial frustration
    "too expensive", "can't afford", "broke", "overpriced", "ripoff",
    "budget blown", "cost prohibitive", "pricing insane", "wallet crying",
    # Technical frustration
    "not working", "broken", "slow as hell", "terrible performance",
    "memory leak", "crashes", "buggy", "unstable", "nightmare",
    # Supply
    "out of stock", "sold out", "waitlist", "scalpers", "shortage",
    "unavailable", "backordered", "delayed", "supply chain hell",
    # Vendor frustration
    "vendor lock-in", "monopoly", "no choice", "forced to use",
    "proprietary trap", "closed source", "license hell", "support sucks",
]

TWITTER_SEARCH_QUERIES: List[str] = [
    "tinygrad vs pytorch",
    "tinygrad performance",
    "tinygrad benchmark",
    "why use tinygrad",
    "NVIDIA too expensive",
    "GPU alternatives 2024",
    "cheap AI hardware",
    "open source GPU",
    "custom AI chips",
    "AI inference optimization",
    "model deployment costs",
    "edge AI hardware",
    "quantization tools",
    "ML acceleration",
    "AI infrastructure costs",
    "enterprise AI hardware",
    "AI startup hardware",
    "ML ops platform",
    "AI compute ROI",
]

# === LEAD SCORING RULES ===

LEAD_RULES: List[Term] = [
    # Flagship project (gates the comparison/performance bonuses)
    Term("tinygrad", 100, TermCategory.COMPETITOR_PROJECT, "Immediate high-value lead"),
    Term("vs", 50, TermCategory.COMPARISON, "Actively comparing frameworks"),
    Term("comparison", 50, TermCategory.COMPARISON, "Actively comparing frameworks"),
    Term("performance", 40, TermCategory.PERFORMANCE, "Performance-focused buyer"),
    Term("benchmark", 40, TermCategory.PERFORMANCE, "Performance-focused buyer"),

    # === FINANCIAL PAIN ===
    Term("too expensive", 25, TermCategory.FINANCIAL_PAIN),
    Term("can't afford", 25, TermCategory.FINANCIAL_PAIN),
    Term("budget", 25, TermCategory.FINANCIAL_PAIN),
    Term("cost", 25, TermCategory.FINANCIAL_PAIN),
    Term("pricing", 25, TermCategory.FINANCIAL_PAIN),
    Term("expensive", 25, TermCategory.FINANCIAL_PAIN),
    Term("overpriced", 25, TermCategory.FINANCIAL_PAIN),
    Term("broke", 25, TermCategory.FINANCIAL_PAIN),
    Term("costly", 25, TermCategory.FINANCIAL_PAIN),

    # === ALTERNATIVE SEEKING ===
    Term("alternative", 30, TermCategory.ALTERNATIVE),
    Term("alternatives", 30, TermCategory.ALTERNATIVE),
    Term("instead of", 30, TermCategory.ALTERNATIVE),
    Term("replace", 30, TermCategory.ALTERNATIVE),
    Term("switch from", 30, TermCategory.ALTERNATIVE),
    Term("switching", 30, TermCategory.ALTERNATIVE),
    Term("better than", 30, TermCategory.ALTERNATIVE),
    Term("cheaper than", 30, TermCategory.ALTERNATIVE),

    # === DECISION MAKERS (author or content) ===
    Term("cto", 35, TermCategory.DECISION_MAKER),
    Term("vp", 35, TermCategory.DECISION_MAKER),
    Term("director", 35, TermCategory.DECISION_MAKER),
    Term("head of", 35, TermCategory.DECISION_MAKER),
    Term("chief", 35, TermCategory.DECISION_MAKER),
    Term("manager", 35, TermCategory.DECISION_MAKER),
    Term("lead", 35, TermCategory.DECISION_MAKER),
    Term("principal", 35, TermCategory.DECISION_MAKER),
    Term("senior", 35, TermCategory.DECISION_MAKER),
    Term("architect", 35, TermCategory.DECISION_MAKER),

    # === ENTERPRISE ===
    Term("enterprise", 20, TermCategory.ENTERPRISE),
    Term("production", 20, TermCategory.ENTERPRISE),
    Term("scale", 20, TermCategory.ENTERPRISE),
    Term("deployment", 20, TermCategory.ENTERPRISE),
    Term("infrastructure", 20, TermCategory.ENTERPRISE),
    Term("team", 20, TermCategory.ENTERPRISE),
    Term("company", 20, TermCategory.ENTERPRISE),
    Term("startup", 20, TermCategory.ENTERPRISE),
]

URGENCY_RULES: List[Term] = [
    Term("urgent", 3, TermCategory.URGENT),
    Term("asap", 3, TermCategory.URGENT),
    Term("immediately", 3, TermCategory.URGENT),
    Term("deadline", 3, TermCategory.URGENT),
    Term("emergency", 3, TermCategory.URGENT),
    Term("critical", 3, TermCategory.URGENT),
    Term("blocker", 3, TermCategory.URGENT),
    Term("stuck", 3, TermCategory.URGENT),
    Term("help needed", 3, TermCategory.URGENT),
    Term("crisis", 3, TermCategory.URGENT),
    Term("this week", 2, TermCategory.TIME_BOUND),
    Term("by friday", 2, TermCategory.TIME_BOUND),
    Term("end of month", 2, TermCategory.TIME_BOUND),
    Term("quarter end", 2, TermCategory.TIME_BOUND),
    Term("launch date", 2, TermCategory.TIME_BOUND),
    Term("go live", 2, TermCategory.TIME_BOUND),
    Term("production ready", 2, TermCategory.TIME_BOUND),
]

# === PERSONA ===

TECH_FRAMEWORK_TERMS = ["pytorch", "tensorflow", "cuda"]
ENGINEER_TERMS = ["engineer", "developer"]
SCIENTIST_AUTHOR_TERMS = ["scientist"]
RESEARCH_CONTENT_TERMS = ["research"]
EXECUTIVE_AUTHOR_TERMS = ["cto", "vp", "director"]
PROCUREMENT_TERMS = ["budget", "procurement", "vendor"]
FOUNDER_TERMS = ["startup", "founder"]

# === COMPETITORS & SENTIMENT ===

COMPETITORS: List[str] = [
    "nvidia",
    "amd",
    "intel",
    "google",  # TPU
    "amazon",  # Inferentia
    "cerebras",
    "graphcore",
    "sambanova",
]

POSITIVE_TERMS = ["great", "awesome", "love", "amazing", "excellent", "perfect", "fast", "efficient"]
NEGATIVE_TERMS = ["slow", "bad", "terrible", "awful", "hate", "broken", "issues", "problems"]

COMPARISON_PHRASES = ["vs", "compared to", "better than"]
TECHNICAL_DISCUSSION_TERMS = ["performance", "benchmark", "speed", "memory", "optimization", "api", "documentation"]
BUSINESS_TERMS = ["enterprise", "production", "scale", "team", "company", "budget", "cost"]

# === CHAT FILTERS ===

DECISION_MAKER_FILTER = ["cto", "vp", "director", "manager", "head of", "chief"]
BUDGET_FILTER = ["budget", "expensive", "cost", "cheap", "affordable", "price"]
ALTERNATIVE_FILTER = ["alternative", "alternatives", "instead of", "replace", "switch from"]
