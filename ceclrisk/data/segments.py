"""
Loan segment reference data.

Each segment carries the PD/LGD ranges, exposure range and typical term
that bound every generated value for loans in that segment.
"""

from dataclasses import dataclass
from typing import Dict, List


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class RateRange:
    """Min / max / average of a risk parameter"""
    min: float
    max: float
    avg: float


@dataclass(frozen=True)
class SegmentConfig:
    """Risk-parameter configuration for a loan segment"""
    id: str
    label: str
    short_label: str
    description: str
    pd: RateRange
    lgd: RateRange
    ead_range: tuple  # (min, max) original balance
    term_range: tuple  # (min, max) months
    color: str


SEGMENT_CONFIGS: Dict[str, SegmentConfig] = {
    'RESIDENTIAL_1_4': SegmentConfig(
        id='RESIDENTIAL_1_4',
        label='1-4 Family Residential',
        short_label='1-4 Family',
        description='Residential mortgages secured by 1-4 family properties',
        pd=RateRange(0.005, 0.03, 0.015),
        lgd=RateRange(0.20, 0.40, 0.30),
        ead_range=(100_000, 1_500_000),
        term_range=(180, 360),
        color='#3b82f6',
    ),
    'CONSUMER': SegmentConfig(
        id='CONSUMER',
        label='Consumer',
        short_label='Consumer',
        description='Unsecured consumer loans and credit cards',
        pd=RateRange(0.05, 0.15, 0.08),
        lgd=RateRange(0.40, 0.70, 0.55),
        ead_range=(5_000, 100_000),
        term_range=(12, 84),
        color='#8b5cf6',
    ),
    'CRE_NON_OWNER': SegmentConfig(
        id='CRE_NON_OWNER',
        label='CRE Non-Owner Occupied',
        short_label='CRE NOO',
        description='Commercial real estate loans where borrower does not occupy the property',
        pd=RateRange(0.01, 0.08, 0.035),
        lgd=RateRange(0.30, 0.50, 0.40),
        ead_range=(500_000, 25_000_000),
        term_range=(60, 120),
        color='#f59e0b',
    ),
    'CRE_OWNER': SegmentConfig(
        id='CRE_OWNER',
        label='CRE Owner Occupied',
        short_label='CRE OO',
        description='Commercial real estate loans where borrower occupies the property',
        pd=RateRange(0.01, 0.06, 0.03),
        lgd=RateRange(0.25, 0.45, 0.35),
        ead_range=(250_000, 15_000_000),
        term_range=(60, 180),
        color='#10b981',
    ),
    'C_AND_I': SegmentConfig(
        id='C_AND_I',
        label='Commercial & Industrial',
        short_label='C&I',
        description='Business loans for working capital, equipment, or other business purposes',
        pd=RateRange(0.02, 0.10, 0.05),
        lgd=RateRange(0.40, 0.60, 0.50),
        ead_range=(50_000, 10_000_000),
        term_range=(12, 84),
        color='#ec4899',
    ),
    'AUTO': SegmentConfig(
        id='AUTO',
        label='Auto',
        short_label='Auto',
        description='Vehicle financing loans',
        pd=RateRange(0.02, 0.08, 0.04),
        lgd=RateRange(0.35, 0.55, 0.45),
        ead_range=(10_000, 100_000),
        term_range=(36, 84),
        color='#06b6d4',
    ),
    'MULTIFAMILY': SegmentConfig(
        id='MULTIFAMILY',
        label='Multifamily',
        short_label='Multifamily',
        description='Loans secured by residential properties with 5+ units',
        pd=RateRange(0.01, 0.05, 0.025),
        lgd=RateRange(0.25, 0.45, 0.35),
        ead_range=(1_000_000, 50_000_000),
        term_range=(60, 120),
        color='#84cc16',
    ),
    'CONSTRUCTION': SegmentConfig(
        id='CONSTRUCTION',
        label='Construction/Land Development',
        short_label='Construction',
        description='Loans for construction projects and land development',
        pd=RateRange(0.03, 0.12, 0.065),
        lgd=RateRange(0.40, 0.65, 0.52),
        ead_range=(500_000, 30_000_000),
        term_range=(12, 36),
        color='#f97316',
    ),
}

# Table order matters: the weighted segment draw walks it in this order
SEGMENT_IDS: List[str] = list(SEGMENT_CONFIGS.keys())

# More residential and CRE (raw weights, not normalised)
SEGMENT_WEIGHTS: Dict[str, float] = {
    'RESIDENTIAL_1_4': 0.25,
    'CRE_NON_OWNER': 0.15,
    'CRE_OWNER': 0.12,
    'C_AND_I': 0.15,
    'CONSUMER': 0.10,
    'AUTO': 0.10,
    'MULTIFAMILY': 0.08,
    'CONSTRUCTION': 0.05,
}


def get_segment(segment_id: str) -> SegmentConfig:
    if segment_id not in SEGMENT_CONFIGS:
        raise ValueError(f"Unknown segment: {segment_id}")
    return SEGMENT_CONFIGS[segment_id]


def get_segment_label(segment_id: str) -> str:
    config = SEGMENT_CONFIGS.get(segment_id)
    return config.label if config else segment_id
