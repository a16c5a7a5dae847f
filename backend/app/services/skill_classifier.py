"""
Keyword heuristics for job-field detection and skill categorization.

The heuristics are approximate by nature, so they sit behind the
SkillClassifier interface and can be swapped (e.g. for an LLM-backed one)
without touching the normalizer.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

DEFAULT_JOB_FIELD = "technology"
OTHER_CATEGORY = "Other"
MIN_FIELD_SCORE = 2


class SkillClassifier(ABC):
    @abstractmethod
    def detect_job_field(self, texts: Iterable[str], skills: Iterable[str]) -> str:
        """Return a job field key for the candidate."""

    @abstractmethod
    def categorize(self, skill_name: str, job_field: str) -> str:
        """Return the display category for one skill."""


JOB_FIELD_KEYWORDS: Dict[str, List[str]] = {
    "healthcare": [
        "doctor", "physician", "nurse", "medical", "clinical", "patient", "hospital",
        "surgery", "diagnosis", "treatment", "medicine", "healthcare", "cardiology",
        "neurology", "oncology", "pediatrics", "radiology", "therapy", "dental", "pharmacy",
    ],
    "technology": [
        "software", "developer", "programmer", "javascript", "python", "react", "angular",
        "java", "coding", "programming", "web development", "mobile app", "database",
        "cloud", "aws", "azure", "devops", "api", "frontend", "backend", "fullstack",
    ],
    "engineering": [
        "engineer", "engineering", "mechanical", "electrical", "civil", "chemical",
        "aerospace", "industrial", "autocad", "solidworks", "manufacturing", "structural",
        "thermal",
    ],
    "finance": [
        "finance", "accounting", "accountant", "financial", "banking", "investment",
        "audit", "tax", "budget", "cpa", "cfa", "treasury", "portfolio", "trading",
        "economics", "bookkeeping",
    ],
    "marketing": [
        "marketing", "sales", "digital marketing", "seo", "sem", "social media",
        "advertising", "brand", "campaign", "copywriting", "lead generation",
        "customer acquisition", "market research",
    ],
    "education": [
        "teacher", "professor", "education", "teaching", "curriculum", "instructor",
        "academic", "pedagogy", "classroom", "student",
    ],
    "legal": [
        "lawyer", "attorney", "legal", "litigation", "contract", "compliance",
        "paralegal", "court", "counsel", "intellectual property",
    ],
    "creative": [
        "designer", "creative", "graphic", "ui/ux", "photoshop", "illustrator",
        "art", "visual", "branding", "photography", "video", "animation", "adobe",
    ],
    "operations": [
        "operations", "supply chain", "logistics", "process improvement", "quality",
        "lean", "six sigma", "project management", "business analyst",
    ],
    "construction": [
        "construction", "architect", "builder", "contractor", "site manager",
        "infrastructure", "renovation", "blueprint", "surveyor",
    ],
}

UNIVERSAL_SOFT_SKILLS = [
    "leadership", "teamwork", "communication", "problem solving", "critical thinking",
    "time management", "project management", "adaptability", "creativity",
    "attention to detail", "organization", "presentation", "negotiation",
    "collaboration", "analytical thinking",
]

# Most specific first; "Programming Languages" is the catch-all so it goes last
TECH_CATEGORIES: Dict[str, List[str]] = {
    "AI & Machine Learning": [
        "ai", "artificial intelligence", "machine learning", "deep learning",
        "neural networks", "tensorflow", "pytorch", "keras", "scikit-learn",
        "pandas", "numpy", "nltk", "spacy", "nlp", "natural language processing",
    ],
    "Data Science & Analytics": [
        "data science", "data analysis", "data visualization", "data engineering",
        "data mining", "data warehousing", "data modeling", "tableau", "power bi",
    ],
    "Frontend Development": [
        "html", "css", "react", "vue", "angular", "svelte", "next.js", "nuxt.js",
        "webpack", "vite", "sass", "scss", "less", "bootstrap", "tailwind",
        "tailwindcss", "material ui", "jquery",
    ],
    "Backend Development": [
        "node.js", "nodejs", "express", "express.js", "nestjs", "django", "flask",
        "fastapi", "spring", "spring boot", "laravel", "symfony", "ruby on rails",
        "rails", "asp.net", ".net core", "phoenix", "gin",
    ],
    "Mobile Development": [
        "react native", "flutter", "ionic", "cordova", "xamarin", "swift",
        "objective-c", "kotlin", "android development", "ios development",
        "mobile development",
    ],
    "Databases": [
        "mysql", "postgresql", "postgres", "mongodb", "redis", "sqlite", "oracle",
        "sql server", "mariadb", "cassandra", "dynamodb", "elasticsearch", "neo4j",
        "firestore", "snowflake", "bigquery", "redshift", "sql", "nosql",
    ],
    "Cloud Services": [
        "aws", "amazon web services", "azure", "microsoft azure", "gcp",
        "google cloud", "google cloud platform", "heroku", "digitalocean",
        "cloudflare", "netlify", "vercel", "firebase", "supabase",
    ],
    "DevOps": [
        "git", "github", "gitlab", "bitbucket", "docker", "kubernetes", "k8s",
        "jenkins", "github actions", "gitlab ci", "ansible", "terraform",
        "nginx", "microservices", "ci/cd", "devops",
    ],
    "Testing & QA": [
        "testing", "qa", "quality assurance", "selenium", "cypress", "playwright",
        "puppeteer", "jest", "mocha", "jasmine", "junit", "testng", "pytest",
    ],
    "Tools & Platforms": [
        "vs code", "visual studio", "intellij", "eclipse", "pycharm", "xcode",
        "postman", "swagger", "jira", "confluence", "trello", "slack", "notion",
    ],
    "Programming Languages": [
        "javascript", "typescript", "python", "java", "c++", "c#", "php", "ruby",
        "go", "rust", "scala", "r", "matlab", "perl", "lua", "dart", "elixir",
        "haskell", "clojure", "powershell", "c",
    ],
}

FIELD_CATEGORIES: Dict[str, Dict[str, List[str]]] = {
    "healthcare": {
        "Clinical Skills": [
            "patient assessment", "diagnosis", "treatment planning", "clinical examination",
            "vital signs", "medical history", "physical examination", "patient monitoring",
        ],
        "Medical Specialties": [
            "cardiology", "neurology", "oncology", "pediatrics", "surgery", "radiology",
            "anesthesia", "emergency medicine", "internal medicine", "dermatology",
        ],
        "Patient Care": [
            "patient communication", "bedside manner", "patient education",
            "discharge planning", "empathy",
        ],
    },
    "engineering": {
        "Engineering Disciplines": [
            "mechanical engineering", "electrical engineering", "civil engineering",
            "chemical engineering", "software engineering", "aerospace engineering",
        ],
        "Design & Modeling": [
            "autocad", "solidworks", "catia", "3d modeling", "cad", "simulation",
            "finite element analysis", "computational fluid dynamics",
        ],
    },
    "finance": {
        "Financial Analysis": [
            "financial modeling", "valuation", "ratio analysis", "forecasting",
            "budgeting", "variance analysis", "cash flow analysis",
        ],
        "Accounting Principles": [
            "gaap", "ifrs", "bookkeeping", "journal entries", "financial statements",
            "accounts payable", "accounts receivable", "reconciliation",
        ],
    },
}


class KeywordSkillClassifier(SkillClassifier):
    """Default classifier built on the keyword tables above."""

    def __init__(self, min_field_score: int = MIN_FIELD_SCORE):
        self.min_field_score = min_field_score

    def detect_job_field(self, texts: Iterable[str], skills: Iterable[str]) -> str:
        blob = " ".join(t for t in list(texts) + list(skills) if t).lower()
        if not blob:
            return DEFAULT_JOB_FIELD

        scores = {
            field: sum(1 for keyword in keywords if keyword in blob)
            for field, keywords in JOB_FIELD_KEYWORDS.items()
        }
        # dict order breaks ties
        best_field = max(scores, key=scores.get)
        if scores[best_field] >= self.min_field_score:
            return best_field
        return DEFAULT_JOB_FIELD

    def categorize(self, skill_name: str, job_field: str) -> str:
        name = (skill_name or "").lower().strip()
        if not name:
            return OTHER_CATEGORY

        if any(name == s or s in name for s in UNIVERSAL_SOFT_SKILLS):
            return "Soft Skills" if job_field == DEFAULT_JOB_FIELD else "Communication Skills"

        if job_field == DEFAULT_JOB_FIELD:
            for category, keywords in TECH_CATEGORIES.items():
                if name in keywords:
                    return category
                if any(len(k) > 3 and k in name for k in keywords):
                    return category
            return OTHER_CATEGORY

        for category, keywords in FIELD_CATEGORIES.get(job_field, {}).items():
            if any(name == k or k in name for k in keywords):
                return category
        return OTHER_CATEGORY
