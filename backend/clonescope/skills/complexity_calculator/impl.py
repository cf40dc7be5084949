"""
Complexity Calculator - Implementation

Deterministic, explainable technical complexity scoring with:
- Ordered tier rule tables per axis (highest tier evaluated first)
- Technology-count and commercial-licensing modifiers
- Coarse framework/infrastructure factors
- Human-readable explanation

Author: CloneScope Team
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from clonescope.schemas.technology import DetectedTechnology

from .definition import (
    Axis,
    ComplexityBreakdown,
    ComplexityBucket,
    ComplexityFactors,
    ComplexityLevel,
    ComplexityResult,
    EnhancedComplexityResult,
    TierRule,
)

logger = logging.getLogger(__name__)


# ============================================================================
# TIER RULE TABLES (evaluated top-down, first matching tier wins)
# ============================================================================

FRONTEND_RULES: List[TierRule] = [
    TierRule(tier=3, label="complex framework", patterns=["Angular", "Ember", "Backbone", "Knockout", "Meteor"]),
    TierRule(tier=2, label="modern framework", patterns=["React", "Vue", "Next.js", "Nuxt", "Svelte", "SolidJS", "Remix", "Qwik"]),
    TierRule(tier=1, label="static site generator", patterns=["Gatsby", "Hugo", "Jekyll", "Eleventy", "Hexo", "Astro", "Docusaurus"]),
    TierRule(tier=0, label="no-code", patterns=["Webflow", "Wix", "Squarespace", "Shopify", "WordPress.com", "Bubble", "Carrd"]),
]

BACKEND_RULES: List[TierRule] = [
    TierRule(tier=4, label="microservices", patterns=["Kubernetes", "Docker", "Consul", "Istio", "Envoy", "Linkerd", "OpenShift"]),
    TierRule(tier=3, label="complex framework", patterns=["Node.js", "Django", "Rails", "Laravel", "Spring", "ASP.NET", "NestJS", "Phoenix", "Symfony"]),
    TierRule(tier=2, label="simple framework", patterns=["Express", "Flask", "FastAPI", "Koa", "Fastify", "Sinatra", "Hono"]),
    TierRule(tier=1, label="serverless", patterns=["Firebase", "Supabase", "AWS Lambda", "Netlify Functions", "Vercel Functions", "Cloudflare Workers", "Appwrite", "Amplify"]),
]

INFRASTRUCTURE_RULES: List[TierRule] = [
    TierRule(tier=3, label="container orchestration", patterns=["Kubernetes", "OpenShift", "Docker Swarm", "Nomad", "Amazon ECS", "AWS ECS", "Amazon EKS"]),
    TierRule(tier=2, label="cloud platform", patterns=["AWS", "Amazon Web Services", "Google Cloud", "Azure", "DigitalOcean", "Linode", "Terraform", "Ansible"]),
    TierRule(tier=1, label="paas", patterns=["Vercel", "Netlify", "Heroku", "Render", "Railway", "Fly.io", "GitHub Pages", "Cloudflare Pages"]),
    TierRule(tier=0, label="managed hosting", patterns=["Webflow", "Wix", "Squarespace", "Shopify", "WordPress.com"]),
]

AXIS_RULES: Dict[Axis, List[TierRule]] = {
    Axis.FRONTEND: FRONTEND_RULES,
    Axis.BACKEND: BACKEND_RULES,
    Axis.INFRASTRUCTURE: INFRASTRUCTURE_RULES,
}

AXIS_MAX: Dict[Axis, int] = {
    Axis.FRONTEND: 3,
    Axis.BACKEND: 4,
    Axis.INFRASTRUCTURE: 3,
}

# Enterprise / commercially licensed technologies (+1)
COMMERCIAL_LICENSES: List[str] = [
    "Oracle",
    "SQL Server",
    "Microsoft SQL",
    "SAP Commerce",
    "SAP Hybris",
    "Salesforce Commerce",
    "Sitecore",
    "Adobe Experience Manager",
    "IBM WebSphere",
    "WebLogic",
    "ColdFusion",
    "Magento Commerce",
    "Kentico",
]

# Technology count modifiers
MANY_TECHNOLOGIES_THRESHOLD = 10
TOO_MANY_TECHNOLOGIES_THRESHOLD = 20

MIN_SCORE = 1
MAX_SCORE = 10


class _AxisClassification:
    """Resultado intermedio de clasificar un eje."""

    def __init__(self, axis: Axis):
        self.axis = axis
        self.score = 0
        self.winning_rule: Optional[TierRule] = None
        self.matches_by_label: Dict[str, List[str]] = {}
        self.technologies: List[str] = []

    def has(self, label: str) -> bool:
        return bool(self.matches_by_label.get(label))

    @property
    def winning_technologies(self) -> List[str]:
        if self.winning_rule is None:
            return []
        return self.matches_by_label.get(self.winning_rule.label, [])

    def to_bucket(self) -> ComplexityBucket:
        return ComplexityBucket(
            score=self.score,
            max=AXIS_MAX[self.axis],
            technologies=list(self.technologies),
        )


class ComplexityCalculator:
    """
    Deterministic technical complexity calculator.

    Classifies detected technology names into ordered tiers on three axes
    and combines them into a 1-10 score.

    Usage:
        calculator = ComplexityCalculator()
        result = calculator.calculate_enhanced_complexity([
            DetectedTechnology(name="React"),
            DetectedTechnology(name="Node.js"),
        ])

        print(f"Score: {result.score}, Frontend: {result.breakdown.frontend.score}")
    """

    def __init__(
        self,
        axis_rules: Optional[Dict[Axis, List[TierRule]]] = None,
        commercial_licenses: Optional[List[str]] = None,
    ):
        """
        Initialize the Complexity Calculator.

        Args:
            axis_rules: Tier tables per axis, highest tier first (default: built-in tables)
            commercial_licenses: Substrings flagging commercial licensing (default: built-in list)
        """
        self.axis_rules = axis_rules or AXIS_RULES
        self.commercial_licenses = commercial_licenses or COMMERCIAL_LICENSES

    def calculate_complexity(self, technologies: Sequence[DetectedTechnology]) -> ComplexityResult:
        """
        Calculate the basic complexity result (score and factors only).

        Derived from the enhanced calculation, so both always agree.
        """
        return self.calculate_enhanced_complexity(technologies).to_basic()

    def calculate_enhanced_complexity(
        self,
        technologies: Sequence[DetectedTechnology],
    ) -> EnhancedComplexityResult:
        """
        Calculate complexity with per-axis breakdown and explanation.

        Args:
            technologies: Technologies reported by the detector.

        Returns:
            EnhancedComplexityResult with score, factors, breakdown and explanation.
        """
        names = [tech.name for tech in technologies]

        # Step 1: Classify each axis
        frontend = self._classify(Axis.FRONTEND, names)
        backend = self._classify(Axis.BACKEND, names)
        infrastructure = self._classify(Axis.INFRASTRUCTURE, names)

        breakdown = ComplexityBreakdown(
            frontend=frontend.to_bucket(),
            backend=backend.to_bucket(),
            infrastructure=infrastructure.to_bucket(),
        )

        # Step 2: Modifiers
        technology_count = len(names)
        licensed = self._find_commercial(names)
        modifiers = self._count_modifier(technology_count) + (1 if licensed else 0)

        # Step 3: Clamp
        score = max(MIN_SCORE, min(MAX_SCORE, breakdown.base_score + modifiers))

        # Step 4: Coarse factors
        has_no_code = frontend.has("no-code")
        has_modern_framework = frontend.has("modern framework")
        has_complex_backend = backend.has("complex framework")

        factors = ComplexityFactors(
            custom_code=not has_no_code or has_modern_framework or has_complex_backend,
            framework_complexity=self._framework_complexity(
                has_no_code, has_modern_framework, has_complex_backend
            ),
            infrastructure_complexity=self._infrastructure_complexity(
                backend.has("microservices"), infrastructure.has("cloud platform")
            ),
            technology_count=technology_count,
            licensing_complexity=bool(licensed),
        )

        explanation = self._build_explanation(
            score, frontend, backend, infrastructure, technology_count, licensed
        )

        logger.debug(
            f"Complexity {score}/10 (base {breakdown.base_score}, modifiers {modifiers}) "
            f"for {technology_count} technologies"
        )

        return EnhancedComplexityResult(
            score=score,
            factors=factors,
            breakdown=breakdown,
            explanation=explanation,
        )

    def _classify(self, axis: Axis, names: List[str]) -> _AxisClassification:
        """Classify names against the axis tiers. The first tier (highest) with a match wins."""
        result = _AxisClassification(axis)

        for rule in self.axis_rules[axis]:
            matched = [name for name in names if rule.matches(name)]
            if not matched:
                continue
            result.matches_by_label[rule.label] = matched
            if result.winning_rule is None:
                result.winning_rule = rule
                result.score = rule.tier

        result.technologies = [
            name for name in names
            if any(rule.matches(name) for rule in self.axis_rules[axis])
        ]
        return result

    def _find_commercial(self, names: List[str]) -> List[str]:
        return [
            name for name in names
            if any(lic.lower() in name.lower() for lic in self.commercial_licenses)
        ]

    @staticmethod
    def _count_modifier(technology_count: int) -> int:
        if technology_count > TOO_MANY_TECHNOLOGIES_THRESHOLD:
            return 2
        if technology_count > MANY_TECHNOLOGIES_THRESHOLD:
            return 1
        return 0

    @staticmethod
    def _framework_complexity(
        has_no_code: bool,
        has_modern_framework: bool,
        has_complex_backend: bool,
    ) -> ComplexityLevel:
        # Only the modern tier counts here: a lone Angular frontend stays LOW
        if has_no_code:
            return ComplexityLevel.LOW
        if has_complex_backend:
            return ComplexityLevel.HIGH
        if has_modern_framework:
            return ComplexityLevel.MEDIUM
        return ComplexityLevel.LOW

    @staticmethod
    def _infrastructure_complexity(has_microservices: bool, has_cloud_platform: bool) -> ComplexityLevel:
        if has_microservices:
            return ComplexityLevel.HIGH
        if has_cloud_platform:
            return ComplexityLevel.MEDIUM
        return ComplexityLevel.LOW

    # ------------------------------------------------------------------------
    # Explanation
    # ------------------------------------------------------------------------

    def _build_explanation(
        self,
        score: int,
        frontend: _AxisClassification,
        backend: _AxisClassification,
        infrastructure: _AxisClassification,
        technology_count: int,
        licensed: List[str],
    ) -> str:
        sentences = [
            self._frontend_sentence(frontend),
            self._backend_sentence(backend),
            self._infrastructure_sentence(infrastructure),
            self._overall_sentence(score),
        ]

        if technology_count > TOO_MANY_TECHNOLOGIES_THRESHOLD:
            sentences.append(
                f"The very large number of technologies ({technology_count}) adds significant "
                f"integration and maintenance overhead."
            )
        elif technology_count > MANY_TECHNOLOGIES_THRESHOLD:
            sentences.append(
                f"The number of technologies ({technology_count}) adds some integration overhead."
            )

        if licensed:
            sentences.append(
                f"Commercially licensed technologies ({_join(licensed)}) add licensing costs "
                f"and vendor lock-in considerations."
            )

        return " ".join(sentences)

    @staticmethod
    def _frontend_sentence(axis: _AxisClassification) -> str:
        techs = _join(axis.winning_technologies)
        if axis.score == 3:
            return f"The frontend relies on a complex framework ({techs}), which demands experienced frontend engineers."
        if axis.score == 2:
            return f"The frontend is built with a modern framework ({techs}), requiring component-based development skills."
        if axis.score == 1:
            return f"The frontend is generated by a static site generator ({techs}), which keeps the presentation layer simple."
        if axis.has("no-code"):
            return f"The frontend runs on a no-code platform ({techs}), so little custom frontend code is needed."
        return "No frontend framework was detected, suggesting a simple or server-rendered interface."

    @staticmethod
    def _backend_sentence(axis: _AxisClassification) -> str:
        techs = _join(axis.winning_technologies)
        if axis.score == 4:
            return f"The backend involves container or microservices tooling ({techs}), adding significant architectural complexity."
        if axis.score == 3:
            return f"The backend is built on a full-featured framework ({techs}), requiring solid server-side expertise."
        if axis.score == 2:
            return f"The backend uses a lightweight framework ({techs}) that is straightforward to reproduce."
        if axis.score == 1:
            return f"The backend relies on serverless or backend-as-a-service tooling ({techs}), minimizing server-side work."
        return "No dedicated backend technology was detected."

    @staticmethod
    def _infrastructure_sentence(axis: _AxisClassification) -> str:
        techs = _join(axis.winning_technologies)
        if axis.score == 3:
            return f"The infrastructure relies on container orchestration ({techs}), requiring DevOps expertise."
        if axis.score == 2:
            return f"The infrastructure runs on a general cloud platform ({techs}), which requires cloud configuration knowledge."
        if axis.score == 1:
            return f"Hosting runs on a simple platform-as-a-service ({techs})."
        if axis.has("managed hosting"):
            return f"Hosting is fully managed by an all-in-one platform ({techs})."
        return "No specific hosting infrastructure was detected."

    @staticmethod
    def _overall_sentence(score: int) -> str:
        if score <= 3:
            return f"Overall, this is a low-complexity stack (score {score}/10) that should be relatively easy to clone."
        if score <= 6:
            return f"Overall, this is a moderate-complexity stack (score {score}/10) that requires solid development skills to replicate."
        return f"Overall, this is a high-complexity stack (score {score}/10) that will be challenging to clone."


def _join(names: List[str], limit: int = 3) -> str:
    shown = names[:limit]
    extra = len(names) - len(shown)
    text = ", ".join(shown)
    return f"{text} and {extra} more" if extra > 0 else text


# Convenience functions
def calculate_complexity(technologies: Sequence[DetectedTechnology]) -> ComplexityResult:
    """Calculate the basic complexity result with the default rule tables."""
    return ComplexityCalculator().calculate_complexity(technologies)


def calculate_enhanced_complexity(technologies: Sequence[DetectedTechnology]) -> EnhancedComplexityResult:
    """Calculate the enhanced complexity result with the default rule tables."""
    return ComplexityCalculator().calculate_enhanced_complexity(technologies)
