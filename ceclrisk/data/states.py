"""
US state reference data and population weights for loan placement.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class StateInfo:
    code: str
    name: str
    fips: str
    region: str  # Northeast / Midwest / South / West


US_STATES: List[StateInfo] = [
    StateInfo('AL', 'Alabama', '01', 'South'),
    StateInfo('AK', 'Alaska', '02', 'West'),
    StateInfo('AZ', 'Arizona', '04', 'West'),
    StateInfo('AR', 'Arkansas', '05', 'South'),
    StateInfo('CA', 'California', '06', 'West'),
    StateInfo('CO', 'Colorado', '08', 'West'),
    StateInfo('CT', 'Connecticut', '09', 'Northeast'),
    StateInfo('DE', 'Delaware', '10', 'South'),
    StateInfo('FL', 'Florida', '12', 'South'),
    StateInfo('GA', 'Georgia', '13', 'South'),
    StateInfo('HI', 'Hawaii', '15', 'West'),
    StateInfo('ID', 'Idaho', '16', 'West'),
    StateInfo('IL', 'Illinois', '17', 'Midwest'),
    StateInfo('IN', 'Indiana', '18', 'Midwest'),
    StateInfo('IA', 'Iowa', '19', 'Midwest'),
    StateInfo('KS', 'Kansas', '20', 'Midwest'),
    StateInfo('KY', 'Kentucky', '21', 'South'),
    StateInfo('LA', 'Louisiana', '22', 'South'),
    StateInfo('ME', 'Maine', '23', 'Northeast'),
    StateInfo('MD', 'Maryland', '24', 'South'),
    StateInfo('MA', 'Massachusetts', '25', 'Northeast'),
    StateInfo('MI', 'Michigan', '26', 'Midwest'),
    StateInfo('MN', 'Minnesota', '27', 'Midwest'),
    StateInfo('MS', 'Mississippi', '28', 'South'),
    StateInfo('MO', 'Missouri', '29', 'Midwest'),
    StateInfo('MT', 'Montana', '30', 'West'),
    StateInfo('NE', 'Nebraska', '31', 'Midwest'),
    StateInfo('NV', 'Nevada', '32', 'West'),
    StateInfo('NH', 'New Hampshire', '33', 'Northeast'),
    StateInfo('NJ', 'New Jersey', '34', 'Northeast'),
    StateInfo('NM', 'New Mexico', '35', 'West'),
    StateInfo('NY', 'New York', '36', 'Northeast'),
    StateInfo('NC', 'North Carolina', '37', 'South'),
    StateInfo('ND', 'North Dakota', '38', 'Midwest'),
    StateInfo('OH', 'Ohio', '39', 'Midwest'),
    StateInfo('OK', 'Oklahoma', '40', 'South'),
    StateInfo('OR', 'Oregon', '41', 'West'),
    StateInfo('PA', 'Pennsylvania', '42', 'Northeast'),
    StateInfo('RI', 'Rhode Island', '44', 'Northeast'),
    StateInfo('SC', 'South Carolina', '45', 'South'),
    StateInfo('SD', 'South Dakota', '46', 'Midwest'),
    StateInfo('TN', 'Tennessee', '47', 'South'),
    StateInfo('TX', 'Texas', '48', 'South'),
    StateInfo('UT', 'Utah', '49', 'West'),
    StateInfo('VT', 'Vermont', '50', 'Northeast'),
    StateInfo('VA', 'Virginia', '51', 'South'),
    StateInfo('WA', 'Washington', '53', 'West'),
    StateInfo('WV', 'West Virginia', '54', 'South'),
    StateInfo('WI', 'Wisconsin', '55', 'Midwest'),
    StateInfo('WY', 'Wyoming', '56', 'West'),
    StateInfo('DC', 'District of Columbia', '11', 'South'),
]

STATE_BY_CODE: Dict[str, StateInfo] = {s.code: s for s in US_STATES}

# Share of US population; order is the draw order of the weighted pick
STATE_POPULATION_WEIGHTS: Dict[str, float] = {
    'CA': 0.118,
    'TX': 0.088,
    'FL': 0.066,
    'NY': 0.059,
    'PA': 0.039,
    'IL': 0.038,
    'OH': 0.035,
    'GA': 0.032,
    'NC': 0.032,
    'MI': 0.030,
    'NJ': 0.028,
    'VA': 0.026,
    'WA': 0.023,
    'AZ': 0.022,
    'MA': 0.021,
    'TN': 0.021,
    'IN': 0.020,
    'MD': 0.019,
    'MO': 0.019,
    'WI': 0.018,
    'CO': 0.018,
    'MN': 0.017,
    'SC': 0.016,
    'AL': 0.015,
    'LA': 0.014,
    'KY': 0.014,
    'OR': 0.013,
    'OK': 0.012,
    'CT': 0.011,
    'UT': 0.010,
    'IA': 0.010,
    'NV': 0.010,
    'AR': 0.009,
    'MS': 0.009,
    'KS': 0.009,
    'NM': 0.006,
    'NE': 0.006,
    'ID': 0.006,
    'WV': 0.005,
    'HI': 0.004,
    'NH': 0.004,
    'ME': 0.004,
    'MT': 0.003,
    'RI': 0.003,
    'DE': 0.003,
    'SD': 0.003,
    'ND': 0.002,
    'AK': 0.002,
    'DC': 0.002,
    'VT': 0.002,
    'WY': 0.002,
}


def get_state_name(code: str) -> str:
    state = STATE_BY_CODE.get(code)
    return state.name if state else code


def get_state_fips(code: str) -> str:
    state = STATE_BY_CODE.get(code)
    return state.fips if state else '00'
