"""Built-in category patterns for spec classification.

Each entry lists regular expressions (matched case-insensitively anywhere in
the title + body), whole-token keywords and a priority. Higher priority both
scales the score and wins ties.
"""

from specsearch.domain.classification import CategoryPattern


DEFAULT_CATEGORY = "general"

DEFAULT_PATTERNS: tuple[CategoryPattern, ...] = (
    CategoryPattern(
        name="authentication",
        patterns=[
            r"auth(?:entication|orization)?",
            r"login|signup|sign[_-]?in|sign[_-]?up",
            r"oauth|sso|saml|jwt|token",
            r"password|credential|session|cookie",
            r"user[_-]?management|account|profile",
            r"security[_-]?policy|access[_-]?control",
        ],
        keywords=[
            "authentication",
            "authorization",
            "login",
            "signup",
            "oauth",
            "sso",
            "password",
            "credential",
            "token",
            "jwt",
            "session",
            "security",
            "user",
            "account",
            "profile",
            "access",
            "permission",
            "role",
        ],
        priority=8,
    ),
    CategoryPattern(
        name="payments",
        patterns=[
            r"payment|billing|invoice|subscription",
            r"stripe|paypal|checkout|transaction",
            r"card|credit|debit|bank|financial",
            r"pricing|plan|revenue|monetization",
            r"refund|chargeback|receipt",
        ],
        keywords=[
            "payment",
            "billing",
            "invoice",
            "subscription",
            "stripe",
            "paypal",
            "checkout",
            "transaction",
            "credit",
            "card",
            "pricing",
            "plan",
            "revenue",
            "refund",
            "receipt",
            "financial",
            "money",
            "cost",
        ],
        priority=9,
    ),
    CategoryPattern(
        name="ui-components",
        patterns=[
            r"component|widget|element",
            r"button|form|input|modal|dialog",
            r"layout|grid|flexbox|responsive",
            r"design[_-]?system|style[_-]?guide",
            r"theme|color|typography|font",
            r"animation|transition|interaction",
            r"accessibility|a11y|aria",
        ],
        keywords=[
            "component",
            "widget",
            "button",
            "form",
            "input",
            "modal",
            "layout",
            "design",
            "style",
            "theme",
            "color",
            "font",
            "animation",
            "ui",
            "ux",
            "interface",
            "responsive",
            "accessibility",
            "interaction",
        ],
        priority=7,
    ),
    CategoryPattern(
        name="database",
        patterns=[
            r"database|db|sql|nosql",
            r"schema|migration|model|entity",
            r"query|index|constraint|relation",
            r"postgres|mysql|mongodb|sqlite",
            r"orm|prisma|sequelize|typeorm",
            r"backup|restore|replication",
        ],
        keywords=[
            "database",
            "schema",
            "migration",
            "model",
            "query",
            "sql",
            "postgres",
            "mysql",
            "mongodb",
            "sqlite",
            "orm",
            "table",
            "index",
            "constraint",
            "relation",
            "backup",
            "data",
        ],
        priority=8,
    ),
    CategoryPattern(
        name="api",
        patterns=[
            r"api|endpoint|rest|restful",
            r"graphql|apollo|resolver",
            r"webhook|callback|integration",
            r"microservice|service[_-]?layer",
            r"request|response|http|https",
            r"swagger|openapi|documentation",
        ],
        keywords=[
            "api",
            "endpoint",
            "rest",
            "graphql",
            "webhook",
            "microservice",
            "service",
            "request",
            "response",
            "http",
            "integration",
            "swagger",
            "openapi",
            "documentation",
            "client",
            "server",
        ],
        priority=7,
    ),
    CategoryPattern(
        name="infrastructure",
        patterns=[
            r"deploy|deployment|devops",
            r"docker|kubernetes|container",
            r"ci/cd|continuous[_-]?integration",
            r"cloud|aws|azure|gcp|serverless",
            r"monitoring|logging|observability",
            r"load[_-]?balancing|scaling|performance",
        ],
        keywords=[
            "deploy",
            "deployment",
            "docker",
            "kubernetes",
            "container",
            "cloud",
            "aws",
            "azure",
            "monitoring",
            "logging",
            "scaling",
            "performance",
            "infrastructure",
            "devops",
            "serverless",
        ],
        priority=6,
    ),
    CategoryPattern(
        name="testing",
        patterns=[
            r"test|testing|spec|specification",
            r"unit[_-]?test|integration[_-]?test",
            r"e2e|end[_-]?to[_-]?end|selenium",
            r"jest|cypress|mocha|jasmine",
            r"mock|stub|fixture|snapshot",
            r"coverage|tdd|bdd",
        ],
        keywords=[
            "test",
            "testing",
            "spec",
            "unit",
            "integration",
            "e2e",
            "jest",
            "cypress",
            "mocha",
            "mock",
            "coverage",
            "tdd",
            "bdd",
            "fixture",
            "snapshot",
            "assertion",
            "verify",
        ],
        priority=5,
    ),
    CategoryPattern(
        name="architecture",
        patterns=[
            r"architecture|system[_-]?design",
            r"pattern|structure|organization",
            r"module|package|namespace",
            r"framework|library|dependency",
            r"config|configuration|setting",
            r"workflow|process|pipeline",
        ],
        keywords=[
            "architecture",
            "system",
            "design",
            "pattern",
            "structure",
            "module",
            "package",
            "framework",
            "library",
            "config",
            "configuration",
            "workflow",
            "process",
            "organization",
        ],
        priority=4,
    ),
    CategoryPattern(
        name="performance",
        patterns=[
            r"performance|optimization|speed",
            r"cache|caching|redis|memcached",
            r"lazy[_-]?loading|preload|prefetch",
            r"bundle|minification|compression",
            r"memory|cpu|resource|efficiency",
            r"benchmark|profiling|metrics",
        ],
        keywords=[
            "performance",
            "optimization",
            "speed",
            "cache",
            "lazy",
            "bundle",
            "minification",
            "memory",
            "cpu",
            "benchmark",
            "metrics",
            "efficiency",
            "fast",
            "slow",
            "bottleneck",
        ],
        priority=6,
    ),
    CategoryPattern(
        name="security",
        patterns=[
            r"security|secure|vulnerability",
            r"encryption|decrypt|hash|cipher",
            r"xss|csrf|sql[_-]?injection",
            r"firewall|cors|helmet|sanitize",
            r"audit|compliance|gdpr|privacy",
            r"threat|risk|attack|malicious",
        ],
        keywords=[
            "security",
            "secure",
            "vulnerability",
            "encryption",
            "hash",
            "xss",
            "csrf",
            "injection",
            "cors",
            "audit",
            "compliance",
            "privacy",
            "threat",
            "risk",
            "attack",
            "protection",
        ],
        priority=9,
    ),
)
