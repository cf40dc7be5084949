"""
Technology Insights Service.

Turns a detected technology stack into a complete insights report:
alternatives, build-vs-buy guidance, skill requirements, time/cost/team
estimates, prioritized recommendations and a summary paragraph.

Generation is wrapped in a degradation chain so the public entry point
always returns a report:

    cache hit -> full generation (retried with backoff)
              -> name-pattern fallback -> minimal constant report

The only exception that escapes is CatalogLoadError.

Example:
    service = TechnologyInsightsService(catalog, cache, monitor)
    insights = await service.generate_insights(technologies, complexity_score=5)
"""

import asyncio
import time
from typing import Optional, Sequence

from clonescope.core.config import settings
from clonescope.core.exceptions import CatalogLoadError, InsightsGenerationError
from clonescope.core.logging import InsightsLogger, get_logger
from clonescope.core.parsing import extract_dollar_amount, format_weeks, round_half_up
from clonescope.schemas.catalog import Difficulty, TechnologyProfile
from clonescope.schemas.insights import (
    BuildVsBuyCost,
    BuildVsBuyRecommendation,
    ProjectCostEstimate,
    ProjectEstimates,
    Recommendation,
    SkillRequirement,
    TeamSize,
    TechnologyInsights,
    TimeEstimate,
)
from clonescope.schemas.technology import DetectedTechnology, technology_names
from clonescope.services.insights_cache import InsightsCache
from clonescope.services.performance_monitor import PerformanceMonitor
from clonescope.services.technology_catalog import TechnologyCatalog

logger = get_logger(__name__)


# ============================================================================
# SKILLS
# ============================================================================

PROFICIENCY_BY_DIFFICULTY = {
    Difficulty.VERY_EASY: "beginner",
    Difficulty.EASY: "beginner",
    Difficulty.MEDIUM: "intermediate",
    Difficulty.HARD: "advanced",
    Difficulty.VERY_HARD: "expert",
}

LEARNING_TIME_BY_DIFFICULTY = {
    Difficulty.VERY_EASY: "1-2 weeks",
    Difficulty.EASY: "2-4 weeks",
    Difficulty.MEDIUM: "1-2 months",
    Difficulty.HARD: "2-4 months",
    Difficulty.VERY_HARD: "4-6 months",
}

PROFICIENCY_ORDER = {"expert": 0, "advanced": 1, "intermediate": 2, "beginner": 3}

HARD_DIFFICULTIES = (Difficulty.HARD, Difficulty.VERY_HARD)
EASY_DIFFICULTIES = (Difficulty.VERY_EASY, Difficulty.EASY)

# (patrones en el nombre del perfil, skill del lenguaje/runtime)
BACKEND_LANGUAGE_SKILLS = [
    (("express", "node"), SkillRequirement(
        skill="Node.js", proficiency="intermediate", category="Backend Runtime",
        estimated_learning_time="1-2 months")),
    (("django", "flask"), SkillRequirement(
        skill="Python", proficiency="intermediate", category="Programming Language",
        estimated_learning_time="1-2 months")),
    (("rails",), SkillRequirement(
        skill="Ruby", proficiency="intermediate", category="Programming Language",
        estimated_learning_time="1-2 months")),
    (("laravel",), SkillRequirement(
        skill="PHP", proficiency="intermediate", category="Programming Language",
        estimated_learning_time="1-2 months")),
]

# ============================================================================
# COST ESTIMATION
# ============================================================================

COST_LEVEL_VALUES = {
    "very-low": 1,
    "low": 2,
    "low-to-medium": 2.5,
    "medium": 3,
    "medium-to-high": 3.5,
    "high": 4,
    "very-high": 5,
    "free-to-low": 1.5,
    "free-to-medium": 2,
    "variable": 3,
}
DEFAULT_COST_LEVEL_VALUE = 3

COST_LEVELS = ["very-low", "low", "medium", "high", "very-high"]

COST_RANGES = {
    "development": {
        "very-low": "$5,000-$15,000",
        "low": "$15,000-$30,000",
        "medium": "$30,000-$75,000",
        "high": "$75,000-$150,000",
        "very-high": "$150,000+",
    },
    "infrastructure": {
        "very-low": "$0-$50/month",
        "low": "$50-$200/month",
        "medium": "$200-$1,000/month",
        "high": "$1,000-$5,000/month",
        "very-high": "$5,000+/month",
    },
    "maintenance": {
        "very-low": "$500-$2,000/month",
        "low": "$2,000-$5,000/month",
        "medium": "$5,000-$15,000/month",
        "high": "$15,000-$30,000/month",
        "very-high": "$30,000+/month",
    },
}

# (limite superior exclusivo del minimo anual, banda total)
TOTAL_COST_BANDS = [
    (50_000, "$25,000-$75,000 (first year)"),
    (150_000, "$75,000-$200,000 (first year)"),
    (300_000, "$200,000-$500,000 (first year)"),
]
TOTAL_COST_OVER = "$500,000+ (first year)"

COST_BUMP_COMPLEXITY = 8
DIVERSE_STACK_CATEGORIES = 5

# ============================================================================
# FALLBACK / MINIMAL REPORTS
# ============================================================================

FALLBACK_SKILL_PATTERNS = [
    (("react", "vue", "angular"), SkillRequirement(
        skill="Frontend Development", proficiency="intermediate", category="Frontend",
        estimated_learning_time="2-3 months")),
    (("node", "express", "django"), SkillRequirement(
        skill="Backend Development", proficiency="intermediate", category="Backend",
        estimated_learning_time="2-3 months")),
    (("postgres", "mysql", "mongo"), SkillRequirement(
        skill="Database Management", proficiency="beginner", category="Database",
        estimated_learning_time="1-2 months")),
]

GENERIC_SKILL = SkillRequirement(
    skill="Full-Stack Development",
    proficiency="intermediate",
    category="General",
    estimated_learning_time="3-6 months",
)

FALLBACK_RECOMMENDATIONS = [
    Recommendation(
        priority="high",
        category="Notice",
        title="Limited Insights Available",
        description="Detailed technology insights could not be generated. The analysis continues with basic recommendations.",
        impact="Some advanced recommendations may not be available. Consider manual research for specific technologies.",
    ),
    Recommendation(
        priority="medium",
        category="Strategy",
        title="Start with MVP",
        description="Focus on core features first to validate the concept before building the full solution.",
        impact="Reduces initial development time and allows for early user feedback.",
    ),
    Recommendation(
        priority="medium",
        category="Development",
        title="Use Established Technologies",
        description="Stick to well-documented, popular technologies to ensure good community support.",
        impact="Easier to find resources, tutorials, and developers familiar with the stack.",
    ),
]

MINIMAL_SUMMARY = "Technology insights are temporarily unavailable. The analysis continues with basic information."

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def normalize_category_name(category: str) -> str:
    """'frontend-framework' -> 'Frontend Framework'."""
    return " ".join(word[:1].upper() + word[1:] for word in category.split("-"))


def minimal_insights() -> TechnologyInsights:
    """Reporte constante usado cuando incluso el fallback falla."""
    return TechnologyInsights(
        alternatives={},
        build_vs_buy=[],
        skills=[],
        estimates=ProjectEstimates(
            time_estimate=TimeEstimate(minimum="3 months", maximum="12 months", realistic="6 months"),
            cost_estimate=ProjectCostEstimate(
                development="$30,000-$100,000",
                infrastructure="$100-$1,000/month",
                maintenance="$5,000-$20,000/month",
                total="$100,000-$300,000 (first year)",
            ),
            team_size=TeamSize(minimum=1, recommended=2),
        ),
        recommendations=[
            Recommendation(
                priority="high",
                category="Notice",
                title="Insights Unavailable",
                description="Technology insights could not be generated. Please review the detected technologies manually.",
                impact="Manual analysis required for accurate planning.",
            )
        ],
        summary=MINIMAL_SUMMARY,
    )


class TechnologyInsightsService:
    """
    Orquestador de insights tecnologicos.

    Recibe sus colaboradores por constructor (catalogo, cache y monitor) para
    que cada test pueda usar instancias aisladas.
    """

    def __init__(
        self,
        catalog: TechnologyCatalog,
        cache: InsightsCache,
        monitor: PerformanceMonitor,
        max_attempts: int | None = None,
        retry_base_delay: float | None = None,
        slow_generation_ms: float | None = None,
    ):
        self.catalog = catalog
        self.cache = cache
        self.monitor = monitor
        self.max_attempts = max(1, max_attempts if max_attempts is not None else settings.insights_max_attempts)
        self.retry_base_delay = (
            retry_base_delay if retry_base_delay is not None else settings.insights_retry_base_delay_seconds
        )
        self.slow_generation_ms = (
            slow_generation_ms if slow_generation_ms is not None else settings.insights_slow_generation_ms
        )
        self._flow = InsightsLogger("orchestrator")

    async def generate_insights(
        self,
        technologies: Sequence[DetectedTechnology],
        complexity_score: int,
        origin_key: str = "generated",
    ) -> TechnologyInsights:
        """
        Produce el reporte completo de insights. Nunca falla salvo por CatalogLoadError.

        Args:
            technologies: Tecnologias detectadas.
            complexity_score: Complejidad tecnica 1-10 del stack.
            origin_key: Identificador guardado junto a la entrada de cache.
        """
        start = time.perf_counter()
        techs = list(technologies)
        names = technology_names(techs)
        self._flow.pipeline_start(len(techs), complexity_score)

        cached = self._cache_lookup(names)
        if cached is not None:
            duration_ms = _elapsed_ms(start)
            self._flow.cache_hit(InsightsCache.generate_key(names))
            self._record_metric(duration_ms, success=True, cached=True)
            self._flow.pipeline_end("success", duration_ms, cached=True, tech_count=len(techs))
            return cached

        # Fatal: sin catalogo no hay servicio
        self.catalog.load()

        try:
            insights = await self._generate_with_retry(techs, complexity_score)
        except InsightsGenerationError as e:
            self._flow.fallback("generation", e)
            insights = self.generate_fallback_insights(techs, complexity_score)
            duration_ms = _elapsed_ms(start)
            self._record_metric(duration_ms, success=False, is_fallback=True)
            self._flow.pipeline_end("fallback", duration_ms, cached=False, tech_count=len(techs))
            return insights

        self._cache_store(names, insights, origin_key)

        duration_ms = _elapsed_ms(start)
        self._record_metric(duration_ms, success=True, cached=False)
        if duration_ms > self.slow_generation_ms:
            self._flow.slow(duration_ms, self.slow_generation_ms)
        self._flow.pipeline_end("success", duration_ms, cached=False, tech_count=len(techs))
        return insights

    # Cache y metricas son best-effort: un fallo se loguea y el reporte sigue
    def _cache_lookup(self, names: list[str]) -> TechnologyInsights | None:
        try:
            return self.cache.get(names)
        except CatalogLoadError:
            raise
        except Exception as e:
            logger.error(f"Insights cache lookup failed: {type(e).__name__}: {e}", exc_info=True)
            return None

    def _cache_store(self, names: list[str], insights: TechnologyInsights, origin_key: str) -> None:
        try:
            self.cache.set(names, insights, origin_key)
        except CatalogLoadError:
            raise
        except Exception as e:
            logger.error(f"Insights cache write failed: {type(e).__name__}: {e}", exc_info=True)

    def _record_metric(self, duration_ms: float, **flags: bool) -> None:
        try:
            self.monitor.record_insights_generation(duration_ms, **flags)
        except CatalogLoadError:
            raise
        except Exception as e:
            logger.error(f"Failed to record insights metric: {type(e).__name__}: {e}", exc_info=True)

    async def _generate_with_retry(
        self,
        technologies: list[DetectedTechnology],
        complexity_score: int,
    ) -> TechnologyInsights:
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return self.build_insights(technologies, complexity_score)
            except CatalogLoadError:
                raise
            except Exception as e:
                last_error = e
                if attempt < self.max_attempts:
                    delay = self.retry_base_delay * 2 ** (attempt - 1)
                    self._flow.retry(attempt, self.max_attempts, delay, e)
                    await asyncio.sleep(delay)

        raise InsightsGenerationError(
            "Insights generation failed",
            attempts=self.max_attempts,
            original_error=last_error,
        ) from last_error

    def build_insights(
        self,
        technologies: Sequence[DetectedTechnology],
        complexity_score: int,
    ) -> TechnologyInsights:
        """Generacion completa sin cache ni reintentos."""
        alternatives: dict[str, list[str]] = {}
        for tech in technologies:
            alts = self.get_alternatives(tech.name)
            if alts:
                alternatives[tech.name] = alts

        build_vs_buy = self.analyze_build_vs_buy(technologies)
        skills = self.extract_skill_requirements(technologies)
        estimates = self.calculate_estimates(technologies, complexity_score)
        recommendations = self.generate_recommendations(build_vs_buy, skills, complexity_score)
        summary = self.generate_summary(len(technologies), complexity_score, recommendations)

        return TechnologyInsights(
            alternatives=alternatives,
            build_vs_buy=build_vs_buy,
            skills=skills,
            estimates=estimates,
            recommendations=recommendations,
            summary=summary,
        )

    # ------------------------------------------------------------------------
    # Alternatives & build-vs-buy
    # ------------------------------------------------------------------------

    def get_alternatives(self, technology: str) -> list[str]:
        profile = self.catalog.get_technology(technology)
        return list(profile.alternatives) if profile else []

    def analyze_build_vs_buy(self, technologies: Sequence[DetectedTechnology]) -> list[BuildVsBuyRecommendation]:
        """Una recomendacion por tecnologia con perfil en el catalogo."""
        results = []
        for tech in technologies:
            profile = self.catalog.get_technology(tech.name)
            if profile is None:
                continue

            decision, reasoning = self._determine_build_vs_buy(profile)
            results.append(
                BuildVsBuyRecommendation(
                    technology=tech.name,
                    recommendation=decision,
                    reasoning=reasoning,
                    alternatives=list(profile.alternatives),
                    estimated_cost=BuildVsBuyCost(
                        build=profile.cost_estimate.development,
                        buy=self._estimate_saas_cost(profile),
                    ),
                )
            )
        return results

    @staticmethod
    def _determine_build_vs_buy(profile: TechnologyProfile) -> tuple[str, str]:
        category = profile.category.lower()
        difficulty = profile.difficulty

        if "authentication" in category or "auth" in category:
            return "buy", (
                "Authentication is security-critical and better handled by specialized services. "
                "Building custom auth increases security risks and maintenance burden."
            )

        if "hosting" in category or "platform" in category:
            return "buy", (
                "Infrastructure and hosting are best left to specialized providers. "
                "Building your own hosting infrastructure is not cost-effective for most projects."
            )

        if "payment" in category or "commerce" in category:
            return "buy", (
                "Payment processing requires PCI compliance and is highly regulated. "
                "Use established payment providers to ensure security and compliance."
            )

        if "email" in category or "messaging" in category:
            return "buy", (
                "Email deliverability is complex. Using established email services ensures "
                "better inbox placement and reduces spam issues."
            )

        if "database" in category:
            if difficulty in HARD_DIFFICULTIES:
                return "buy", (
                    "Complex database setups benefit from managed services. "
                    "They provide automatic backups, scaling, and maintenance."
                )
            return "hybrid", (
                "Consider managed database services for production reliability, but self-hosting "
                "is viable for simpler setups or development."
            )

        if "framework" in category or "frontend" in category or "backend" in category:
            if difficulty in EASY_DIFFICULTIES:
                return "build", (
                    "This framework is beginner-friendly and well-documented. "
                    "Building with it gives you full control and customization."
                )
            if difficulty in HARD_DIFFICULTIES:
                return "hybrid", (
                    "Consider using templates, boilerplates, or hiring experienced developers "
                    "to accelerate development with this complex framework."
                )
            return "build", (
                "Building with this framework provides flexibility and control. "
                "The learning curve is manageable with available resources."
            )

        return "build", (
            "This technology is best implemented as part of your custom solution "
            "to maintain flexibility and control."
        )

    @staticmethod
    def _estimate_saas_cost(profile: TechnologyProfile) -> str:
        category = profile.category.lower()
        if "authentication" in category:
            return "free-to-medium ($0-$100/month for small apps)"
        if "hosting" in category:
            return profile.cost_estimate.hosting
        if "database" in category:
            return "low-to-medium ($10-$200/month depending on scale)"
        if "email" in category:
            return "low ($10-$50/month for moderate volume)"
        return "variable (depends on usage and provider)"

    # ------------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------------

    def extract_skill_requirements(self, technologies: Sequence[DetectedTechnology]) -> list[SkillRequirement]:
        """Skills por tecnologia mas skills relacionadas, deduplicadas por (skill, categoria)."""
        skills: dict[str, SkillRequirement] = {}

        for tech in technologies:
            profile = self.catalog.get_technology(tech.name)
            if profile is None:
                continue

            primary = SkillRequirement(
                skill=profile.name,
                proficiency=PROFICIENCY_BY_DIFFICULTY.get(profile.difficulty, "intermediate"),
                category=normalize_category_name(profile.category),
                estimated_learning_time=LEARNING_TIME_BY_DIFFICULTY.get(profile.difficulty, "1-2 months"),
            )
            skills.setdefault(f"{primary.skill}-{primary.category}", primary)

            for related in self._related_skills(profile):
                skills.setdefault(f"{related.skill}-{related.category}", related)

        return sorted(
            skills.values(),
            key=lambda s: (PROFICIENCY_ORDER[s.proficiency], s.category.lower()),
        )

    @staticmethod
    def _related_skills(profile: TechnologyProfile) -> list[SkillRequirement]:
        category = profile.category.lower()
        name = profile.name.lower()
        related: list[SkillRequirement] = []

        if "frontend" in category:
            related.append(SkillRequirement(
                skill="JavaScript/TypeScript", proficiency="intermediate",
                category="Programming Language", estimated_learning_time="1-2 months"))
            related.append(SkillRequirement(
                skill="HTML/CSS", proficiency="intermediate",
                category="Web Fundamentals", estimated_learning_time="2-4 weeks"))

        if "backend" in category:
            for patterns, skill in BACKEND_LANGUAGE_SKILLS:
                if any(p in name for p in patterns):
                    related.append(skill.model_copy())
            related.append(SkillRequirement(
                skill="REST API Design", proficiency="intermediate",
                category="Architecture", estimated_learning_time="2-4 weeks"))

        if "database" in category:
            if "mongo" in name or "couch" in name:
                related.append(SkillRequirement(
                    skill="NoSQL Concepts", proficiency="beginner",
                    category="Database", estimated_learning_time="1-2 weeks"))
            else:
                related.append(SkillRequirement(
                    skill="SQL", proficiency="intermediate",
                    category="Database", estimated_learning_time="2-4 weeks"))

        if "hosting" in category or "platform" in category:
            related.append(SkillRequirement(
                skill="DevOps Basics", proficiency="beginner",
                category="Infrastructure", estimated_learning_time="2-4 weeks"))
            if profile.difficulty in HARD_DIFFICULTIES:
                related.append(SkillRequirement(
                    skill="Cloud Architecture", proficiency="advanced",
                    category="Infrastructure", estimated_learning_time="2-4 months"))

        return related

    # ------------------------------------------------------------------------
    # Estimates
    # ------------------------------------------------------------------------

    def calculate_estimates(
        self,
        technologies: Sequence[DetectedTechnology],
        complexity_score: int,
    ) -> ProjectEstimates:
        profiles = self._resolve_profiles(technologies)
        return ProjectEstimates(
            time_estimate=self._estimate_time(complexity_score, len(technologies)),
            cost_estimate=self._estimate_cost(complexity_score, profiles),
            team_size=self._estimate_team_size(complexity_score, profiles),
        )

    def _resolve_profiles(self, technologies: Sequence[DetectedTechnology]) -> list[TechnologyProfile]:
        profiles = (self.catalog.get_technology(tech.name) for tech in technologies)
        return [profile for profile in profiles if profile is not None]

    @staticmethod
    def _estimate_time(complexity_score: int, tech_count: int) -> TimeEstimate:
        if complexity_score <= 3:
            base_weeks = 4
        elif complexity_score <= 6:
            base_weeks = 12
        else:
            base_weeks = 24

        tech_factor = min(tech_count / 10, 2)
        weeks = round_half_up(base_weeks * (1 + tech_factor * 0.3))
        return _time_estimate(weeks)

    def _estimate_cost(self, complexity_score: int, profiles: list[TechnologyProfile]) -> ProjectCostEstimate:
        dev_level = infra_level = maint_level = "medium"

        if profiles:
            dev_level = average_cost_level([p.cost_estimate.development for p in profiles])
            infra_level = average_cost_level([p.cost_estimate.hosting for p in profiles])
            maint_level = average_cost_level([p.cost_estimate.maintenance for p in profiles])

        if complexity_score >= COST_BUMP_COMPLEXITY:
            dev_level = increase_cost_level(dev_level)
            maint_level = increase_cost_level(maint_level)

        development = COST_RANGES["development"][dev_level]
        infrastructure = COST_RANGES["infrastructure"][infra_level]
        maintenance = COST_RANGES["maintenance"][maint_level]

        return ProjectCostEstimate(
            development=development,
            infrastructure=infrastructure,
            maintenance=maintenance,
            total=total_cost_band(development, infrastructure, maintenance),
        )

    @staticmethod
    def _estimate_team_size(complexity_score: int, profiles: list[TechnologyProfile]) -> TeamSize:
        if complexity_score <= 3:
            minimum, recommended = 1, 1
        elif complexity_score <= 6:
            minimum, recommended = 1, 2
        elif complexity_score <= 8:
            minimum, recommended = 2, 3
        else:
            minimum, recommended = 3, 5

        if len({p.category for p in profiles}) > DIVERSE_STACK_CATEGORIES:
            recommended += 1

        return TeamSize(minimum=minimum, recommended=recommended)

    # ------------------------------------------------------------------------
    # Recommendations & summary
    # ------------------------------------------------------------------------

    def generate_recommendations(
        self,
        build_vs_buy: Sequence[BuildVsBuyRecommendation],
        skills: Sequence[SkillRequirement],
        complexity_score: int,
    ) -> list[Recommendation]:
        """Reglas de plantilla fija, ordenadas por prioridad (estable)."""
        recommendations: list[Recommendation] = []

        buy = [entry for entry in build_vs_buy if entry.recommendation == "buy"]
        if buy:
            recommendations.append(Recommendation(
                priority="high",
                category="Architecture",
                title="Leverage SaaS Solutions",
                description=(
                    f"Use managed services for {', '.join(entry.technology for entry in buy)} "
                    f"to reduce development time and maintenance burden."
                ),
                impact=(
                    f"Could save {_estimate_savings(len(buy))} in development costs and reduce "
                    f"time to market by 30-50%."
                ),
            ))

        if complexity_score >= 7:
            recommendations.append(Recommendation(
                priority="high",
                category="Strategy",
                title="Build an MVP First",
                description=(
                    "Given the high complexity, start with a Minimum Viable Product focusing on core features. "
                    "This reduces risk and allows for faster validation."
                ),
                impact="Reduces initial development time by 40-60% and allows for early user feedback.",
            ))

        advanced = [s for s in skills if s.proficiency in ("advanced", "expert")]
        if advanced:
            recommendations.append(Recommendation(
                priority="high",
                category="Team",
                title="Address Skill Gaps",
                description=(
                    f"Consider hiring or training for: {', '.join(s.skill for s in advanced[:3])}. "
                    f"These are critical for successful implementation."
                ),
                impact="Proper expertise can reduce development time by 30% and improve code quality significantly.",
            ))

        if complexity_score >= 5:
            recommendations.append(Recommendation(
                priority="medium",
                category="Development",
                title="Use Starter Templates",
                description=(
                    "Leverage existing templates and boilerplates for your tech stack to accelerate "
                    "initial setup and follow best practices."
                ),
                impact="Can save 1-2 weeks of initial setup time and ensure proper project structure.",
            ))

        if complexity_score >= 6:
            recommendations.append(Recommendation(
                priority="medium",
                category="Infrastructure",
                title="Implement Infrastructure as Code",
                description=(
                    "Use tools like Terraform or AWS CDK to manage infrastructure. "
                    "This ensures reproducibility and easier scaling."
                ),
                impact="Reduces deployment errors by 70% and makes scaling much easier.",
            ))

        if complexity_score >= 5:
            recommendations.append(Recommendation(
                priority="medium",
                category="Quality",
                title="Invest in Automated Testing",
                description=(
                    "Set up comprehensive testing (unit, integration, e2e) early. "
                    "This is crucial for maintaining quality as complexity grows."
                ),
                impact="Reduces bugs in production by 60% and makes refactoring safer.",
            ))

        if complexity_score >= 6:
            recommendations.append(Recommendation(
                priority="medium",
                category="Operations",
                title="Set Up Monitoring Early",
                description=(
                    "Implement logging, monitoring, and error tracking from day one. "
                    "Tools like Sentry, DataDog, or New Relic are essential."
                ),
                impact="Reduces mean time to resolution (MTTR) by 50% and improves user experience.",
            ))

        example = next((entry for entry in build_vs_buy if entry.alternatives), None)
        if example is not None:
            recommendations.append(Recommendation(
                priority="low",
                category="Technology",
                title="Evaluate Technology Alternatives",
                description=(
                    f"Consider alternatives like {' or '.join(example.alternatives[:2])} for "
                    f"{example.technology}. They might better fit your team's expertise or project requirements."
                ),
                impact="Could reduce learning curve and improve development velocity.",
            ))

        return sorted(recommendations, key=lambda r: PRIORITY_ORDER[r.priority])

    @staticmethod
    def generate_summary(
        tech_count: int,
        complexity_score: int,
        recommendations: Sequence[Recommendation],
    ) -> str:
        if complexity_score <= 3:
            parts = ["This is a relatively simple stack that can be cloned with basic development skills."]
        elif complexity_score <= 6:
            parts = ["This is a moderately complex stack requiring solid full-stack development experience."]
        else:
            parts = ["This is a highly complex stack that will require an experienced team and significant resources."]

        parts.append(f"The stack uses {tech_count} detected technologies across multiple categories.")

        if recommendations:
            top = recommendations[0]
            parts.append(f"Key recommendation: {top.title} - {top.description}")

        return " ".join(parts)

    # ------------------------------------------------------------------------
    # Degradation
    # ------------------------------------------------------------------------

    def generate_fallback_insights(
        self,
        technologies: Sequence[DetectedTechnology],
        complexity_score: int,
    ) -> TechnologyInsights:
        """Insights basicos sin consultar el catalogo. Si esto tambien falla, reporte minimo."""
        try:
            return TechnologyInsights(
                alternatives={},
                build_vs_buy=[],
                skills=self._extract_basic_skills(technologies),
                estimates=self._default_estimates(complexity_score),
                recommendations=[rec.model_copy() for rec in FALLBACK_RECOMMENDATIONS],
                summary=self._fallback_summary(len(technologies), complexity_score),
            )
        except Exception as e:
            self._flow.fallback("minimal", e)
            return minimal_insights()

    def _extract_basic_skills(self, technologies: Sequence[DetectedTechnology]) -> list[SkillRequirement]:
        skills: dict[str, SkillRequirement] = {}
        for tech in technologies:
            name = tech.name.lower()
            for patterns, skill in FALLBACK_SKILL_PATTERNS:
                if any(p in name for p in patterns):
                    skills.setdefault(skill.skill, skill.model_copy())

        return list(skills.values()) or [GENERIC_SKILL.model_copy()]

    @staticmethod
    def _default_estimates(complexity_score: int) -> ProjectEstimates:
        base_weeks = round_half_up(12 * complexity_score / 5)
        simple = complexity_score <= 5

        return ProjectEstimates(
            time_estimate=_time_estimate(base_weeks),
            cost_estimate=ProjectCostEstimate(
                development="$15,000-$50,000" if simple else "$50,000-$150,000",
                infrastructure="$100-$500/month",
                maintenance="$2,000-$10,000/month",
                total="$50,000-$150,000 (first year)" if simple else "$150,000-$500,000 (first year)",
            ),
            team_size=TeamSize(minimum=1, recommended=2) if simple else TeamSize(minimum=2, recommended=3),
        )

    @staticmethod
    def _fallback_summary(tech_count: int, complexity_score: int) -> str:
        if complexity_score <= 3:
            level = "simple"
        elif complexity_score <= 6:
            level = "moderate"
        else:
            level = "complex"
        return (
            f"This stack uses {tech_count} detected technologies with {level} complexity. "
            f"Detailed insights are limited, but the analysis suggests careful planning and potentially "
            f"consulting with experienced developers for successful implementation."
        )


def average_cost_level(levels: Sequence[str]) -> str:
    """Promedio ordinal de niveles de costo, redondeado a la escala de 5 niveles."""
    if not levels:
        return "medium"
    values = [COST_LEVEL_VALUES.get(level.lower(), DEFAULT_COST_LEVEL_VALUE) for level in levels]
    index = round_half_up(sum(values) / len(values)) - 1
    return COST_LEVELS[max(0, min(len(COST_LEVELS) - 1, index))]


def increase_cost_level(level: str) -> str:
    if level not in COST_LEVELS:
        return level
    return COST_LEVELS[min(COST_LEVELS.index(level) + 1, len(COST_LEVELS) - 1)]


def total_cost_band(development: str, infrastructure: str, maintenance: str) -> str:
    """Banda de costo total del primer anio a partir de los minimos de cada rango."""
    first_year = (
        extract_dollar_amount(development, 0)
        + extract_dollar_amount(infrastructure, 0) * 12
        + extract_dollar_amount(maintenance, 0) * 12
    )
    for upper_bound, band in TOTAL_COST_BANDS:
        if first_year < upper_bound:
            return band
    return TOTAL_COST_OVER


def _estimate_savings(count: int) -> str:
    if count == 1:
        return "$5,000-$15,000"
    if count == 2:
        return "$15,000-$30,000"
    return "$30,000-$50,000"


def _time_estimate(weeks: int) -> TimeEstimate:
    return TimeEstimate(
        minimum=format_weeks(round_half_up(weeks * 0.7)),
        maximum=format_weeks(round_half_up(weeks * 1.5)),
        realistic=format_weeks(weeks),
    )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
