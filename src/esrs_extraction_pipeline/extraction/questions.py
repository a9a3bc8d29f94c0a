"""
Questions and search queries posed for each metric.

High-value metrics have a hand-written question; every other metric gets
a generic one built from its label and unit.
"""

from esrs_extraction_pipeline.catalog import MetricDefinition

METRIC_QUESTIONS: dict[str, str] = {
    "E1-1": "What is the total Scope 1 GHG emissions in tCO2e?",
    "E1-2": "What is the total Scope 2 GHG emissions in tCO2e?",
    "E1-3": "What is the total Scope 3 GHG emissions in tCO2e?",
    "E1-4": "What is the total energy consumption in MWh?",
    "E1-5": "What percentage of energy comes from renewable sources?",
    "E3-1": "What is the total water consumption in cubic meters?",
    "E5-1": "What is the total waste generated in tonnes?",
    "S1-1": "How many employees does the company have?",
    "S1-2": "What percentage of employees are female?",
    "S1-4": "How many workplace injuries occurred?",
}


def build_question(metric: MetricDefinition) -> str:
    """The question asked to the QA model for this metric."""
    if metric.id in METRIC_QUESTIONS:
        return METRIC_QUESTIONS[metric.id]
    unit = f" in {metric.unit}" if metric.unit else ""
    return f"What is the {metric.label.lower()}{unit}?"


def build_search_query(metric: MetricDefinition) -> str:
    """The text embedded to retrieve context for this metric."""
    return f"{metric.label} {' '.join(metric.keywords)} {metric.description}"
