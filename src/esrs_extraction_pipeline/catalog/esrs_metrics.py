"""
ESRS metric catalog.

The catalog is the fixed list of disclosures the pipeline tries to fill. It
does not encode expected values, only what to look for: a label, keywords
that steer retrieval, a short description, the reporting unit and a
priority (1 = core disclosure, 3 = nice to have).

Metric ids follow the ESRS topical standard they belong to:
E1 climate, E2 pollution, E3 water, E4 biodiversity, E5 resource use,
S1 own workforce, S2 value-chain workers, G1 business conduct.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricDefinition:
    """A single disclosure the pipeline extracts."""
    id: str
    label: str
    keywords: tuple[str, ...]
    description: str
    unit: str | None
    priority: int
    category: str
    regulation: str


# ---------------------------------------------------------------------------
# ENVIRONMENTAL
# ---------------------------------------------------------------------------

_CLIMATE: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        id="E1-1",
        label="Scope 1 GHG emissions",
        keywords=("scope 1", "direct emissions", "ghg", "tco2e"),
        description="Gross direct greenhouse gas emissions from owned or controlled sources",
        unit="tCO2e",
        priority=1,
        category="Climate change",
        regulation="ESRS E1-6",
    ),
    MetricDefinition(
        id="E1-2",
        label="Scope 2 GHG emissions",
        keywords=("scope 2", "indirect emissions", "purchased electricity", "location-based"),
        description="Gross indirect emissions from purchased energy",
        unit="tCO2e",
        priority=1,
        category="Climate change",
        regulation="ESRS E1-6",
    ),
    MetricDefinition(
        id="E1-3",
        label="Scope 3 GHG emissions",
        keywords=("scope 3", "value chain emissions", "upstream", "downstream"),
        description="Gross other indirect emissions across the value chain",
        unit="tCO2e",
        priority=1,
        category="Climate change",
        regulation="ESRS E1-6",
    ),
    MetricDefinition(
        id="E1-4",
        label="Total energy consumption",
        keywords=("energy consumption", "mwh", "electricity", "fuel"),
        description="Total energy consumption from own operations",
        unit="MWh",
        priority=1,
        category="Climate change",
        regulation="ESRS E1-5",
    ),
    MetricDefinition(
        id="E1-5",
        label="Renewable energy share",
        keywords=("renewable", "green electricity", "solar", "wind"),
        description="Share of energy consumption from renewable sources",
        unit="%",
        priority=1,
        category="Climate change",
        regulation="ESRS E1-5",
    ),
    MetricDefinition(
        id="E1-6",
        label="GHG intensity per net revenue",
        keywords=("intensity", "per million", "revenue", "tco2e"),
        description="Total GHG emissions per net revenue",
        unit="tCO2e/EUR million",
        priority=2,
        category="Climate change",
        regulation="ESRS E1-6",
    ),
    MetricDefinition(
        id="E1-7",
        label="GHG emission reduction target",
        keywords=("reduction target", "net zero", "baseline", "2030"),
        description="Targeted reduction of GHG emissions against the base year",
        unit="%",
        priority=2,
        category="Climate change",
        regulation="ESRS E1-4",
    ),
    MetricDefinition(
        id="E1-8",
        label="Carbon credits retired",
        keywords=("carbon credits", "offsets", "removals", "retired"),
        description="GHG removals and carbon credits cancelled in the reporting period",
        unit="tCO2e",
        priority=3,
        category="Climate change",
        regulation="ESRS E1-7",
    ),
)

_POLLUTION: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        id="E2-1",
        label="Air pollutant emissions",
        keywords=("nox", "sox", "particulate", "air pollutants"),
        description="Emissions of pollutants to air",
        unit="tonnes",
        priority=3,
        category="Pollution",
        regulation="ESRS E2-4",
    ),
    MetricDefinition(
        id="E2-2",
        label="Substances of concern",
        keywords=("substances of concern", "hazardous substances", "reach"),
        description="Substances of concern generated, used or procured",
        unit="tonnes",
        priority=3,
        category="Pollution",
        regulation="ESRS E2-5",
    ),
)

_WATER: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        id="E3-1",
        label="Total water consumption",
        keywords=("water consumption", "m3", "cubic meters", "water use"),
        description="Total water consumption in own operations",
        unit="m3",
        priority=1,
        category="Water and marine resources",
        regulation="ESRS E3-4",
    ),
    MetricDefinition(
        id="E3-2",
        label="Water withdrawal",
        keywords=("water withdrawal", "abstraction", "groundwater", "surface water"),
        description="Total water withdrawn from all sources",
        unit="m3",
        priority=2,
        category="Water and marine resources",
        regulation="ESRS E3-4",
    ),
    MetricDefinition(
        id="E3-3",
        label="Water consumption in water-stressed areas",
        keywords=("water stress", "high water stress", "water-stressed"),
        description="Water consumed in areas at water risk",
        unit="m3",
        priority=3,
        category="Water and marine resources",
        regulation="ESRS E3-4",
    ),
)

_BIODIVERSITY: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        id="E4-1",
        label="Sites in or near biodiversity-sensitive areas",
        keywords=("biodiversity", "protected areas", "natura 2000", "sites"),
        description="Number of sites located in or near biodiversity-sensitive areas",
        unit=None,
        priority=2,
        category="Biodiversity and ecosystems",
        regulation="ESRS E4-5",
    ),
    MetricDefinition(
        id="E4-2",
        label="Land use",
        keywords=("land use", "hectares", "sealed area", "land"),
        description="Total area of land used by own operations",
        unit="ha",
        priority=3,
        category="Biodiversity and ecosystems",
        regulation="ESRS E4-5",
    ),
)

_RESOURCES: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        id="E5-1",
        label="Total waste generated",
        keywords=("waste", "tonnes", "waste generated", "landfill"),
        description="Total amount of waste generated by own operations",
        unit="tonnes",
        priority=1,
        category="Resource use and circular economy",
        regulation="ESRS E5-5",
    ),
    MetricDefinition(
        id="E5-2",
        label="Hazardous waste",
        keywords=("hazardous waste", "radioactive waste", "special waste"),
        description="Total amount of hazardous waste generated",
        unit="tonnes",
        priority=2,
        category="Resource use and circular economy",
        regulation="ESRS E5-5",
    ),
    MetricDefinition(
        id="E5-3",
        label="Waste recycling rate",
        keywords=("recycled", "recycling rate", "diverted from disposal", "reuse"),
        description="Share of waste diverted from disposal",
        unit="%",
        priority=2,
        category="Resource use and circular economy",
        regulation="ESRS E5-5",
    ),
    MetricDefinition(
        id="E5-4",
        label="Recycled input materials",
        keywords=("recycled content", "secondary materials", "material inflows"),
        description="Share of secondary materials used to manufacture products",
        unit="%",
        priority=3,
        category="Resource use and circular economy",
        regulation="ESRS E5-4",
    ),
)

# ---------------------------------------------------------------------------
# SOCIAL
# ---------------------------------------------------------------------------

_WORKFORCE: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        id="S1-1",
        label="Total number of employees",
        keywords=("employees", "headcount", "workforce", "fte"),
        description="Total number of employees at the end of the reporting period",
        unit=None,
        priority=1,
        category="Own workforce",
        regulation="ESRS S1-6",
    ),
    MetricDefinition(
        id="S1-2",
        label="Female employees",
        keywords=("female", "women", "gender diversity", "gender"),
        description="Share of female employees in the workforce",
        unit="%",
        priority=1,
        category="Own workforce",
        regulation="ESRS S1-6",
    ),
    MetricDefinition(
        id="S1-3",
        label="Employee turnover rate",
        keywords=("turnover", "attrition", "leavers", "retention"),
        description="Rate of employees who left during the reporting period",
        unit="%",
        priority=2,
        category="Own workforce",
        regulation="ESRS S1-6",
    ),
    MetricDefinition(
        id="S1-4",
        label="Workplace injuries",
        keywords=("injuries", "accidents", "lost time", "health and safety"),
        description="Number of recordable work-related accidents",
        unit=None,
        priority=1,
        category="Own workforce",
        regulation="ESRS S1-14",
    ),
    MetricDefinition(
        id="S1-5",
        label="Work-related fatalities",
        keywords=("fatalities", "deaths", "fatal", "health and safety"),
        description="Number of fatalities as a result of work-related injuries",
        unit=None,
        priority=2,
        category="Own workforce",
        regulation="ESRS S1-14",
    ),
    MetricDefinition(
        id="S1-6",
        label="Average training hours per employee",
        keywords=("training", "hours", "learning", "development"),
        description="Average number of training hours per employee",
        unit="hours",
        priority=2,
        category="Own workforce",
        regulation="ESRS S1-13",
    ),
    MetricDefinition(
        id="S1-7",
        label="Gender pay gap",
        keywords=("pay gap", "gender pay", "remuneration", "equal pay"),
        description="Difference between average pay of female and male employees",
        unit="%",
        priority=2,
        category="Own workforce",
        regulation="ESRS S1-16",
    ),
    MetricDefinition(
        id="S1-8",
        label="Collective bargaining coverage",
        keywords=("collective bargaining", "trade union", "works council"),
        description="Share of employees covered by collective bargaining agreements",
        unit="%",
        priority=3,
        category="Own workforce",
        regulation="ESRS S1-8",
    ),
    MetricDefinition(
        id="S1-9",
        label="Employees with disabilities",
        keywords=("disabilities", "disabled", "inclusion"),
        description="Share of employees with disabilities",
        unit="%",
        priority=3,
        category="Own workforce",
        regulation="ESRS S1-12",
    ),
)

_VALUE_CHAIN: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        id="S2-1",
        label="Suppliers screened for social criteria",
        keywords=("supplier", "screened", "audits", "code of conduct"),
        description="Share of suppliers assessed against social criteria",
        unit="%",
        priority=3,
        category="Workers in the value chain",
        regulation="ESRS S2-4",
    ),
)

# ---------------------------------------------------------------------------
# GOVERNANCE
# ---------------------------------------------------------------------------

_CONDUCT: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        id="G1-1",
        label="Confirmed incidents of corruption",
        keywords=("corruption", "bribery", "incidents", "ethics"),
        description="Number of confirmed incidents of corruption or bribery",
        unit=None,
        priority=2,
        category="Business conduct",
        regulation="ESRS G1-4",
    ),
    MetricDefinition(
        id="G1-2",
        label="Anti-corruption training coverage",
        keywords=("anti-corruption training", "ethics training", "compliance training"),
        description="Share of functions-at-risk covered by anti-corruption training",
        unit="%",
        priority=2,
        category="Business conduct",
        regulation="ESRS G1-3",
    ),
    MetricDefinition(
        id="G1-3",
        label="Female board members",
        keywords=("board", "female directors", "board diversity", "supervisory board"),
        description="Share of women on the administrative and supervisory bodies",
        unit="%",
        priority=2,
        category="Business conduct",
        regulation="ESRS 2 GOV-1",
    ),
    MetricDefinition(
        id="G1-4",
        label="Data protection breaches",
        keywords=("data protection", "data breaches", "gdpr", "privacy"),
        description="Number of substantiated complaints concerning breaches of privacy",
        unit=None,
        priority=3,
        category="Business conduct",
        regulation="ESRS S4-4",
    ),
    MetricDefinition(
        id="G1-5",
        label="Average payment period to suppliers",
        keywords=("payment terms", "days", "late payments", "payment practices"),
        description="Average time taken to pay invoices from suppliers",
        unit="days",
        priority=3,
        category="Business conduct",
        regulation="ESRS G1-6",
    ),
)


ESRS_METRICS: tuple[MetricDefinition, ...] = (
    _CLIMATE
    + _POLLUTION
    + _WATER
    + _BIODIVERSITY
    + _RESOURCES
    + _WORKFORCE
    + _VALUE_CHAIN
    + _CONDUCT
)


def get_all_metrics() -> list[MetricDefinition]:
    """Return the full catalog in declaration order."""
    return list(ESRS_METRICS)


def get_metric_by_id(metric_id: str) -> MetricDefinition | None:
    """Retrieve a specific metric by ID."""
    for metric in ESRS_METRICS:
        if metric.id == metric_id:
            return metric
    return None


def get_priority_metrics(threshold: int = 2) -> list[MetricDefinition]:
    """
    Metrics with priority <= threshold, most important first.

    The sort is stable, so metrics of equal priority keep catalog order.
    """
    selected = [m for m in ESRS_METRICS if m.priority <= threshold]
    return sorted(selected, key=lambda m: m.priority)
