"""
Narrative report generation through an OpenAI-compatible chat endpoint.

A report request names the dashboard module, the report type and a JSON
payload (usually `format_report_data_for_ai` output). Two paths share one
HTTP call:

- generate(): the generate-report endpoint. One generic prompt; failures
  return a short status message.
- generate_module_report(): module-specific prompt templates with `{{key}}`
  placeholders; failures return a data-driven mock report.

Fallbacks carry `is_ai_generated=False` and `source='mock'`. Requests are not
retried.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ceclrisk.config import ServiceSettings

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

MODULES = ('geographic', 'macro', 'backtesting', 'pre-chargeoff')

DEFAULT_REPORT_TYPE = 'executive_summary'

# report type -> (temperature, max_tokens)
REPORT_SETTINGS = {
    'executive_summary': (0.3, 3000),
    'pattern_analysis': (0.4, 3500),
    'recommendations': (0.35, 4000),
}

SYSTEM_PROMPT = """You are a senior CECL (Current Expected Credit Losses) analyst assistant for a bank's credit risk committee, with expertise in regulatory compliance and credit risk modeling.

You analyse credit risk metrics under ASC 326 (CECL):
• Probability of Default (PD): likelihood that a borrower defaults within the horizon
• Loss Given Default (LGD): share of exposure lost if default occurs
• Portfolio Value: total outstanding exposure at risk
• Expected Credit Loss (ECL): PD × LGD × Portfolio Value over the loan's life

Your analysis should be data-driven, comparative against portfolio averages and regulatory thresholds, forward-looking and actionable, written for a credit committee.

Output format:
• Plain text only, no markdown headings or bold markers
• Bullet points (•) or numbered lists where appropriate
• For each section give a bulleted summary and a descriptive paragraph
• Quote specific numbers and percentages from the data
• Group recommendations as immediate (0-30 days), short-term (1-3 months) and strategic (3-12 months)"""

USER_PROMPT_TEMPLATE = """Generate a {report_label} report for the {module} module.

Data provided:
{data}

Please provide a comprehensive analysis following the output format requirements."""

# module -> report type -> prompt; {{key}} is replaced by the JSON of data[key]
MODULE_PROMPTS: Dict[str, Dict[str, str]] = {
    'geographic': {
        'executive_summary': """Geographic Risk Analysis Request

State-level metrics of the loan portfolio:
{{data}}

Write a 4-5 paragraph executive summary covering:
1. Concentration: top 5 states by exposure, HHI and top-3 state share against a 25% threshold
2. Risk metrics: states with PD above 1.5x the portfolio average
3. Regional themes behind elevated PD or LGD
4. Board-level takeaways and the expected reserve impact""",
        'pattern_analysis': """Geographic Pattern Analysis Request

State-level metrics of the loan portfolio:
{{data}}

Identify regional clusters by PD/LGD profile, states whose risk diverges from their region, and concentrations that amplify segment risk.""",
        'recommendations': """Geographic Risk Recommendations Request

State-level metrics of the loan portfolio:
{{data}}

Recommend state concentration limits, monitoring frequency for elevated states and geographic qualitative-factor adjustments, with quantified impact.""",
    },
    'macro': {
        'executive_summary': """Macroeconomic Correlation Analysis Request

Credit metrics by segment:
{{creditData}}

Macroeconomic indicators:
{{macroData}}

Summarise the correlation between each indicator and PD/LGD, rank indicators by predictive power and describe the current economic outlook for the portfolio.""",
        'pattern_analysis': """Macroeconomic Pattern Analysis Request

Data:
{{data}}

Describe lead/lag relationships between indicators and credit metrics, segments most sensitive to each indicator and any regime changes in the series.""",
        'recommendations': """Macroeconomic Scenario Recommendations Request

Data:
{{data}}

Recommend forecast scenarios and weights, reversion assumptions and qualitative-factor adjustments for the CECL reserve.""",
    },
    'backtesting': {
        'executive_summary': """Backtesting Results Executive Summary

Results data:
{{data}}

Performance metrics:
- Mean Absolute Error (MAE): {{mae}}
- Root Mean Square Error (RMSE): {{rmse}}
- Overall Accuracy: {{accuracy}}%

Assess model performance, the direction and significance of bias, and the quarters with the largest variance.""",
        'pattern_analysis': """Backtesting Pattern Analysis Request

Results data:
{{data}}

Identify systematic over- or under-prediction, stress-period behaviour and segments where model error clusters.""",
        'recommendations': """Backtesting Recommendations Request

Results data:
{{data}}

Recommend recalibration, overlay or redevelopment actions for each segment, prioritised by materiality.""",
    },
    'pre-chargeoff': {
        'executive_summary': """Pre-Charge-Off Analysis Request

Cohort data for charged-off loans:
{{data}}

Summarise how PD, LGD and payment status evolve over the 36 months before charge-off and which segments deteriorate earliest.""",
        'pattern_analysis': """Pre-Charge-Off Pattern Analysis Request

Cohort data for charged-off loans:
{{data}}

Describe the deterioration curve, inflection points and the lead time of each early-warning signal.""",
        'recommendations': """Early-Warning Recommendations Request

Cohort data for charged-off loans:
{{data}}

Recommend watch-list triggers, thresholds and escalation steps based on the earliest reliable signals.""",
    },
}

NO_KEY_MESSAGE = 'API key not configured. Please set OPENAI_API_KEY in your environment variables.'
EMPTY_COMPLETION_MESSAGE = 'Unable to generate report.'


# =============================================================================
# MOCK REPORTS
# =============================================================================

MODULE_TITLES = {
    'geographic': 'Geographic Risk Analysis',
    'macro': 'Macroeconomic Correlation Analysis',
    'backtesting': 'Backtesting Results',
    'pre-chargeoff': 'Pre-Charge-Off Pattern Analysis',
}

REPORT_TITLES = {
    'executive_summary': 'Executive Summary',
    'pattern_analysis': 'Pattern Analysis',
    'recommendations': 'Recommendations',
}

MOCK_FINDINGS: Dict[str, Dict[str, List[str]]] = {
    'geographic': {
        'executive_summary': [
            'Exposure is concentrated in the most populous states; compare the top-3 share with the 25% policy threshold.',
            'States with PD above 1.5x the portfolio average should be placed on the watch list.',
        ],
        'pattern_analysis': [
            'Sun Belt states combine above-average PD with housing-driven LGD volatility.',
            'Coastal states carry higher LGD offset by lower PD.',
        ],
        'recommendations': [
            'Immediate: cap any single state at 10% of portfolio exposure.',
            'Short-term: move watch-list states to monthly monitoring.',
            'Strategic: add a geographic qualitative factor to the reserve.',
        ],
    },
    'macro': {
        'executive_summary': [
            'Unemployment is the indicator most closely associated with PD movements.',
            'Rate indicators mainly affect CRE and construction segments.',
        ],
        'pattern_analysis': [
            'Credit metrics lag unemployment by roughly two quarters.',
            'The stress window shows a regime shift in PD sensitivity.',
        ],
        'recommendations': [
            'Weight the adverse scenario at no less than 25%.',
            'Revert to long-run loss rates over four quarters beyond the forecast horizon.',
        ],
    },
    'backtesting': {
        'executive_summary': [
            'Predicted losses track actuals outside the stress window.',
            'Actual losses exceeded predictions during the stress quarters.',
        ],
        'pattern_analysis': [
            'Model error is largest in the most volatile commercial segments.',
            'Under-prediction clusters in consecutive stress quarters.',
        ],
        'recommendations': [
            'Apply a stress overlay to segments with accuracy below 70%.',
            'Recalibrate segments whose bias is statistically significant.',
        ],
    },
    'pre-chargeoff': {
        'executive_summary': [
            'PD rises sharply in the final 12 months before charge-off.',
            'Delinquency appears 6 to 12 months before charge-off.',
        ],
        'pattern_analysis': [
            'The PD curve steepens in the last two quarters before charge-off.',
            'LGD increases steadily rather than in steps.',
        ],
        'recommendations': [
            'Trigger a review when PD exceeds twice the segment baseline.',
            'Escalate any first 30+ DPD occurrence on commercial exposures.',
        ],
    },
}

MOCK_NOTICE = 'This is a locally generated sample report. Configure OPENAI_API_KEY for AI-generated analysis.'


# =============================================================================
# REQUESTS AND RESPONSES
# =============================================================================

@dataclass
class ReportRequest:
    """
    A report for one dashboard module.

    Unknown modules are rejected; unknown report types use the
    executive-summary settings and template.
    """
    module: str
    report_type: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.module not in MODULES:
            raise ValueError(f"Unknown report module: {self.module}")

    @property
    def settings(self):
        return REPORT_SETTINGS.get(self.report_type, REPORT_SETTINGS[DEFAULT_REPORT_TYPE])

    @property
    def temperature(self) -> float:
        return self.settings[0]

    @property
    def max_tokens(self) -> int:
        return self.settings[1]

    def user_prompt(self) -> str:
        return USER_PROMPT_TEMPLATE.format(
            report_label=self.report_type.replace('_', ' '),
            module=self.module,
            data=json.dumps(self.data, indent=2, default=str),
        )

    def module_prompt(self) -> str:
        """
        Module template with each `{{key}}` replaced by the JSON of data[key].

        `{{data}}` falls back to the whole payload; other placeholders without
        a matching key are left in place.
        """
        templates = MODULE_PROMPTS[self.module]
        prompt = templates.get(self.report_type, templates[DEFAULT_REPORT_TYPE])
        for key, value in self.data.items():
            prompt = prompt.replace('{{%s}}' % key, json.dumps(value, indent=2, default=str))
        return prompt.replace('{{data}}', json.dumps(self.data, indent=2, default=str))


@dataclass(frozen=True)
class ReportResponse:
    content: str
    is_ai_generated: bool
    source: str  # 'openai' or 'mock'

    def to_dict(self) -> Dict[str, Any]:
        return {'content': self.content, 'isAIGenerated': self.is_ai_generated, 'source': self.source}


class ReportServiceError(Exception):
    """The completion endpoint could not produce a report"""


def _mock(content: str) -> ReportResponse:
    return ReportResponse(content=content, is_ai_generated=False, source='mock')


def generate_mock_report(request: ReportRequest) -> str:
    """Plain-text sample report for a module and report type"""
    report_type = request.report_type if request.report_type in REPORT_TITLES else DEFAULT_REPORT_TYPE
    lines = [f"{MODULE_TITLES[request.module]} - {REPORT_TITLES[report_type]}", '']

    metrics = [(k, v) for k, v in request.data.items() if isinstance(v, (str, int, float, bool))]
    if metrics:
        lines.append('Key metrics:')
        lines.extend(f"• {key}: {value}" for key, value in metrics)
        lines.append('')

    lines.append('Findings:')
    lines.extend(f"{i}. {finding}" for i, finding in
                 enumerate(MOCK_FINDINGS[request.module][report_type], start=1))
    lines.extend(['', MOCK_NOTICE])
    return '\n'.join(lines)


# =============================================================================
# REPORT GENERATOR
# =============================================================================

class ReportGenerator:
    """
    Posts report prompts to the chat-completions endpoint.

    Args:
        settings: Service settings (key, model, URL, timeout)
        session: requests session to reuse; one is created if omitted
    """

    def __init__(self, settings: ServiceSettings = None, session: Optional[requests.Session] = None):
        self.settings = settings or ServiceSettings.from_env()
        self.session = session or requests.Session()

    def payload(self, request: ReportRequest, user_prompt: str = None) -> Dict[str, Any]:
        return {
            'model': self.settings.openai_model,
            'temperature': request.temperature,
            'max_tokens': request.max_tokens,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': user_prompt or request.user_prompt()},
            ],
        }

    def _complete(self, request: ReportRequest, user_prompt: str) -> str:
        """
        One chat-completion call.

        Raises:
            ReportServiceError: transport failure, non-2xx status or a body
                that is not JSON
        """
        try:
            response = self.session.post(
                self.settings.openai_api_url,
                headers={
                    'Content-Type': 'application/json',
                    'Authorization': f"Bearer {self.settings.openai_api_key}",
                },
                json=self.payload(request, user_prompt),
                timeout=self.settings.request_timeout,
            )
        except Exception as exc:
            logger.error("Report request failed: %s", exc)
            raise ReportServiceError(f"Error generating report: {exc}") from exc

        if not response.ok:
            logger.error("OpenAI API error: %s %s", response.status_code, response.text)
            raise ReportServiceError(
                f"OpenAI API error: {response.status_code}. Check your API key and billing status."
            )

        try:
            body = response.json()
        except ValueError as exc:
            logger.error("Malformed report response: %s", exc)
            raise ReportServiceError(f"Error generating report: {exc}") from exc

        try:
            content = body['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError):
            content = None
        if not content:
            logger.warning("Report response had no completion content")
            content = EMPTY_COMPLETION_MESSAGE
        return content

    def generate(self, request: ReportRequest) -> ReportResponse:
        """Generic prompt; failures return a status message"""
        if not self.settings.openai_api_key:
            logger.info("OPENAI_API_KEY not configured; returning fallback report")
            return _mock(NO_KEY_MESSAGE)

        try:
            content = self._complete(request, request.user_prompt())
        except ReportServiceError as exc:
            return _mock(str(exc))
        return ReportResponse(content=content, is_ai_generated=True, source='openai')

    def generate_module_report(self, request: ReportRequest) -> ReportResponse:
        """Module-specific prompt; failures return a sample report"""
        if not self.settings.openai_api_key:
            logger.info("OPENAI_API_KEY not configured; returning sample %s report", request.module)
            return _mock(generate_mock_report(request))

        try:
            content = self._complete(request, request.module_prompt())
        except ReportServiceError as exc:
            logger.warning("Falling back to sample %s report: %s", request.module, exc)
            return _mock(generate_mock_report(request))
        return ReportResponse(content=content, is_ai_generated=True, source='openai')


def handle_generate_report(
    payload: Dict[str, Any],
    generator: ReportGenerator = None
) -> Dict[str, Any]:
    """
    Handle a generate-report body: {"module", "reportType", "data"}.

    Never raises: an invalid body yields a fallback response describing the
    problem.
    """
    try:
        for key in ('module', 'reportType'):
            if key not in payload:
                raise ValueError(f"Missing field: {key}")
        request = ReportRequest(
            module=payload['module'],
            report_type=payload['reportType'],
            data=payload.get('data') or {},
        )
    except (ValueError, TypeError) as exc:
        logger.warning("Invalid report request: %s", exc)
        return _mock(f"Error generating report: {exc}").to_dict()

    generator = generator or ReportGenerator()
    return generator.generate(request).to_dict()
