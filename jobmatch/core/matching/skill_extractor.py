"""
Rule-based skill extraction.

Finds skill-like terms in free text: known technology and tool names
(matched on word boundaries and reported under a canonical name) and
capitalized multi-word terms, split at generic words and filtered against a
stoplist. Used by the heuristic match scorer when the model is unavailable.

Dependencies: re
System role: Deterministic skill extraction for fallback matching
"""

import re

# (canonical name, pattern). Patterns are matched case-insensitively on word
# boundaries unless listed in CASE_SENSITIVE_SKILLS.
KNOWN_SKILLS: tuple[tuple[str, str], ...] = (
    # Cloud platforms and services
    ("AWS", r"AWS|Amazon Web Services"),
    ("GCP", r"GCP|Google Cloud Platform|Google Cloud"),
    ("Azure", r"Microsoft Azure|Azure"),
    ("EC2", r"EC2|Elastic Compute Cloud"),
    ("S3", r"S3|Simple Storage Service"),
    ("IAM", r"IAM|Identity and Access Management"),
    ("Lambda", r"AWS Lambda|Lambda"),
    ("EKS", r"EKS|Elastic Kubernetes Service"),
    ("ECS", r"ECS|Elastic Container Service"),
    ("Fargate", r"Fargate"),
    ("Athena", r"Athena"),
    ("CloudWatch", r"CloudWatch"),
    ("GKE", r"GKE|Google Kubernetes Engine"),
    ("VPC", r"VPC|Virtual Private Cloud"),
    # Containers and orchestration
    ("Kubernetes", r"Kubernetes|k8s"),
    ("Docker", r"Docker"),
    ("Helm", r"Helm"),
    ("ArgoCD", r"Argo\s?CD"),
    ("GitOps", r"GitOps"),
    # CI/CD
    ("Jenkins", r"Jenkins"),
    ("GitLab CI", r"GitLab CI"),
    ("GitHub Actions", r"GitHub Actions"),
    ("CircleCI", r"CircleCI"),
    ("Travis CI", r"Travis CI"),
    ("CI/CD", r"CI/CD|Continuous Integration|Continuous Deployment|Continuous Delivery"),
    # Monitoring and logging
    ("Prometheus", r"Prometheus"),
    ("Grafana", r"Grafana"),
    ("ELK Stack", r"ELK Stack|ELK"),
    ("Elasticsearch", r"Elasticsearch"),
    ("Logstash", r"Logstash"),
    ("Kibana", r"Kibana"),
    ("Splunk", r"Splunk"),
    ("Datadog", r"Datadog"),
    # Web servers and networking
    ("Nginx", r"Nginx"),
    ("Apache", r"Apache"),
    ("TLS", r"SSL|TLS"),
    ("DNS", r"DNS"),
    ("Load Balancing", r"Load Balanc(?:er|ers|ing)"),
    # Programming languages
    ("Python", r"Python"),
    ("Java", r"Java"),
    ("JavaScript", r"JavaScript"),
    ("TypeScript", r"TypeScript"),
    ("Go", r"Golang|Go"),
    ("C++", r"C\+\+"),
    ("C#", r"C#"),
    ("PHP", r"PHP"),
    ("Ruby", r"Ruby"),
    ("Rust", r"Rust"),
    ("Scala", r"Scala"),
    ("Kotlin", r"Kotlin"),
    ("Bash", r"Bash|Shell scripting"),
    # Web development
    ("React", r"React(?:\.js)?"),
    ("Angular", r"Angular"),
    ("Vue.js", r"Vue(?:\.js)?"),
    ("Node.js", r"Node\.js|NodeJS"),
    ("Express", r"Express(?:\.js)?"),
    ("Django", r"Django"),
    ("Flask", r"Flask"),
    ("FastAPI", r"FastAPI"),
    ("Spring", r"Spring Boot|Spring"),
    ("HTML", r"HTML5?"),
    ("CSS", r"CSS3?"),
    ("GraphQL", r"GraphQL"),
    ("REST", r"RESTful|REST"),
    ("Microservices", r"Microservices"),
    # Data stores
    ("MySQL", r"MySQL"),
    ("PostgreSQL", r"PostgreSQL|Postgres"),
    ("MongoDB", r"MongoDB"),
    ("Redis", r"Redis"),
    ("Oracle", r"Oracle"),
    ("Kafka", r"Kafka"),
    ("Spark", r"Apache Spark|Spark"),
    ("SQL", r"SQL"),
    # Infrastructure as code
    ("Terraform", r"Terraform"),
    ("CloudFormation", r"CloudFormation"),
    ("Ansible", r"Ansible"),
    # Practices
    ("Agile", r"Agile"),
    ("Scrum", r"Scrum"),
    ("DevOps", r"DevOps"),
    ("SRE", r"SRE|Site Reliability Engineering|Site Reliability Engineer"),
    # Security
    ("OAuth", r"OAuth2?"),
    ("JWT", r"JWT"),
    # Operating systems
    ("Linux", r"Linux"),
    ("Unix", r"Unix"),
    ("Windows", r"Windows"),
    # Machine learning
    ("Machine Learning", r"Machine Learning"),
    ("TensorFlow", r"TensorFlow"),
    ("PyTorch", r"PyTorch"),
    ("Pandas", r"Pandas"),
    # Tooling
    ("Git", r"Git"),
    ("JSON", r"JSON"),
    ("XML", r"XML"),
    ("Incident Response", r"Incident Response|On-call"),
)

# Ordinary English words in lower case; only their capitalized/proper form is a skill
CASE_SENSITIVE_SKILLS = frozenset({
    "Go", "Rust", "Ruby", "Express", "Spring", "Helm", "Apache", "Oracle", "Windows",
    "Agile", "Scrum", "Lambda", "Athena", "React", "Angular", "Spark", "Flask", "Pandas",
    "REST", "Git",
})

GENERIC_TERMS = frozenset({
    "experience", "knowledge", "skills", "skill", "ability", "proficiency", "familiarity",
    "understanding", "expertise", "competency", "competence", "capabilities", "capability",
    "capacity", "qualifications", "requirements", "requirement", "responsibilities",
    "responsibility", "duties", "duty", "tasks", "task", "role", "position", "job", "work",
    "development", "implementation", "management", "support", "assistance", "help",
    "guidance", "direction", "leadership", "supervision", "oversight", "control",
    "planning", "organizing", "coordinating", "executing", "performing", "delivering",
    "providing", "contributing", "participating", "collaborating", "working", "teamwork",
    "communication", "interaction", "discussion", "meeting", "conference", "problem",
    "issue", "challenge", "solution", "resolution", "improvement", "enhancement",
    "optimization", "process", "procedure", "method", "approach", "technique", "tool",
    "tools", "device", "equipment", "resource", "system", "systems", "platform",
    "environment", "infrastructure", "technology", "technologies", "tech", "digital",
    "virtual", "online", "service", "services", "product", "application", "app",
    "software", "program", "code", "script", "algorithm", "data", "information",
    "content", "material", "document", "project", "projects", "initiative", "effort",
    "goal", "objective", "target", "purpose", "result", "outcome", "achievement",
    "benefit", "advantage", "value", "quality", "standard", "level", "degree",
    "performance", "execution", "operation", "function", "activity", "action",
    "assignment", "obligation", "necessity", "need", "demand", "request", "preference",
    "choice", "option", "opportunity", "potential", "assist", "contribute", "collaborate",
    "monitor", "bachelor", "master", "computer", "science", "solid", "hands", "compute",
    "engine", "interest", "strong", "awareness", "exposure", "offer", "benefits",
    # Posting and resume filler
    "requires", "required", "require", "preferred", "must", "nice", "have", "plus",
    "years", "year", "months", "looking", "seeking", "candidate", "candidates", "team",
    "company", "senior", "junior", "lead", "summary", "profile", "objective", "education",
    "certifications", "languages", "references", "contact", "email", "phone", "location",
    "remote", "hybrid", "full", "time", "part", "built", "worked", "led", "managed",
    "developed", "designed", "implemented", "created", "responsible", "maintained",
    "improved", "reduced", "increased", "deployed", "migrated", "owned", "mentored",
    "using", "while", "about", "from",
    # Function words
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "with", "of", "as", "by",
    "is", "are", "was", "were", "be", "been", "has", "had", "do", "does", "did", "will",
    "would", "could", "should", "may", "might", "can", "this", "that", "these", "those",
    "a", "an", "if", "it", "so", "up", "us", "we", "you", "our", "your", "they", "their",
    "i", "my", "he", "she", "what", "how", "when", "where", "why", "who", "whom",
    "whose", "which", "also", "other", "new", "all", "any", "some",
})

CAPITALIZED_RUN = re.compile(r"\b[A-Z][A-Za-z0-9+#]*(?:[ \t]+[A-Z][A-Za-z0-9+#]*)*")
MAX_TERM_LENGTH = 30


def _compile(name: str, pattern: str) -> re.Pattern:
    flags = 0 if name in CASE_SENSITIVE_SKILLS else re.IGNORECASE
    return re.compile(rf"(?<![\w])(?:{pattern})(?![\w])", flags)


_KNOWN_PATTERNS = tuple((name, _compile(name, pattern)) for name, pattern in KNOWN_SKILLS)


def _is_generic(term: str) -> bool:
    lowered = term.lower()
    return (
        len(term) <= 2
        or len(term) >= MAX_TERM_LENGTH
        or lowered in GENERIC_TERMS
        or lowered.isdigit()
    )


def _sub_runs(words: list[str]) -> list[str]:
    """Every contiguous run of words, longest first."""
    runs = []
    for size in range(len(words), 0, -1):
        for start in range(len(words) - size + 1):
            runs.append(" ".join(words[start:start + size]))
    return runs


def _capitalized_terms(text: str, include_parts: bool = False) -> list[tuple[int, str]]:
    """Capitalized runs split at generic words, with their offsets."""
    terms: list[tuple[int, str]] = []
    for match in CAPITALIZED_RUN.finditer(text):
        words = match.group(0).split()
        current: list[str] = []
        for word in words + [""]:
            if word and word.lower() not in GENERIC_TERMS:
                current.append(word)
                continue
            if current:
                term = " ".join(current)
                if include_parts:
                    terms.extend(
                        (match.start(), part) for part in _sub_runs(current)
                        if len(part) < MAX_TERM_LENGTH
                    )
                elif len(term) >= MAX_TERM_LENGTH:
                    # Too long to be one skill; keep its words instead
                    terms.extend((match.start(), part) for part in current)
                else:
                    terms.append((match.start(), term))
            current = []
    return terms


def extract_skills(text: str, include_parts: bool = False) -> list[str]:
    """
    Extract skill-like terms from text.

    Args:
        text: Resume or job description text
        include_parts: Also emit every contiguous part of a multi-word
            capitalized run, so longer text never hides a shorter term

    Returns:
        list[str]: Skills in order of first appearance, de-duplicated
            case-insensitively
    """
    if not text:
        return []

    found: list[tuple[int, int, str]] = []
    for name, pattern in _KNOWN_PATTERNS:
        match = pattern.search(text)
        if match:
            found.append((match.start(), 0, name))
    for position, term in _capitalized_terms(text, include_parts):
        if not _is_generic(term):
            found.append((position, 1, term))

    skills: list[str] = []
    seen: set[str] = set()
    for _, _, term in sorted(found, key=lambda item: (item[0], item[1])):
        key = term.lower()
        if key not in seen:
            seen.add(key)
            skills.append(term)
    return skills


def skills_overlap(required: str, available: str) -> bool:
    """Case-insensitive containment in either direction."""
    required, available = required.lower(), available.lower()
    return required in available or available in required
