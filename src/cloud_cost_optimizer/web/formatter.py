"""HTML formatting for the resource form and the optimization report."""

from html import escape

from cloud_cost_optimizer.analysis.models import RecommendationCard
from cloud_cost_optimizer.analysis.pipeline import SessionState

PAGE_STYLE = """
body { background: #111827; color: #f3f4f6; font-family: system-ui, sans-serif; margin: 0; }
header { padding: 1rem 2rem; border-bottom: 1px solid #374151; }
main { display: grid; grid-template-columns: 1fr 1fr; gap: 2rem; padding: 2rem; }
.panel { background: #1f2937; border-radius: 8px; padding: 1.5rem; }
textarea { width: 100%; min-height: 420px; background: #111827; color: #d1d5db; font-family: monospace; border: 1px solid #374151; }
button { background: #0891b2; color: #fff; border: 0; border-radius: 6px; padding: 0.75rem 1rem; font-weight: bold; }
.total { background: rgba(20, 83, 45, 0.5); border: 1px solid #15803d; border-radius: 8px; padding: 1rem; text-align: center; }
.total .amount { font-size: 2rem; color: #4ade80; font-weight: bold; }
.card { border: 1px solid #374151; border-radius: 8px; padding: 1.25rem; margin-top: 1rem; }
.card h3 { font-family: monospace; color: #22d3ee; margin: 0; word-break: break-all; }
.card .savings { text-align: right; font-size: 1.2rem; color: #4ade80; font-weight: bold; }
.badge { font-size: 0.75rem; font-weight: bold; padding: 0.2rem 0.5rem; border-radius: 999px; border: 1px solid; float: right; }
.badge.high { color: #4ade80; border-color: #22c55e; }
.badge.medium { color: #facc15; border-color: #eab308; }
.badge.low { color: #60a5fa; border-color: #3b82f6; }
.badge.unknown { color: #9ca3af; border-color: #6b7280; }
.error { color: #fca5a5; background: rgba(239, 68, 68, 0.1); border: 1px solid rgba(239, 68, 68, 0.3); border-radius: 8px; padding: 1.5rem; text-align: center; }
.placeholder { color: #6b7280; text-align: center; padding: 3rem 1rem; }
.heading { display: flex; justify-content: space-between; align-items: center; }
.sample-link { color: #22d3ee; font-size: 0.875rem; }
"""


class ReportFormatter:
    """Render the form page and its report panel as HTML."""

    TITLE = "AI Cloud Cost Optimizer"

    def format_card(self, card: RecommendationCard) -> str:
        """Render one recommendation card."""
        return f"""<div class="card">
  <span class="badge {escape(card.confidence_style)}">{escape(card.confidence)}</span>
  <h3>{escape(card.resource_id)}</h3>
  <p>Issue:</p><p><strong>{escape(card.issue)}</strong></p>
  <p>Recommendation:</p><p><strong>{escape(card.recommendation)}</strong></p>
  <div class="savings">{escape(card.savings_display)}<br><small>Est. Monthly Savings</small></div>
</div>"""

    def format_report(self, state: SessionState) -> str:
        """
        Render the report panel for the current state.

        Loading takes precedence over errors, errors over results; with no
        results the panel shows the ready placeholder.
        """
        if state.is_loading:
            return '<div class="placeholder">AI is analyzing your resources...</div>'

        if state.error:
            return (
                '<div class="error"><h3>Analysis Failed</h3>'
                f"<p>{escape(state.error)}</p></div>"
            )

        if state.report is None or state.report.is_empty:
            return (
                '<div class="placeholder"><h3>Ready for Analysis</h3>'
                "<p>Your optimization report will appear here once the analysis is complete.</p></div>"
            )

        cards = "\n".join(self.format_card(card) for card in state.report.cards)
        return f"""<div class="total">
  <p>Total Estimated Monthly Savings</p>
  <p class="amount">{escape(state.report.formatted_total)}</p>
</div>
{cards}"""

    def format_page(
        self,
        state: SessionState,
        resources_text: str,
        api_key_configured: bool,
    ) -> str:
        """
        Render the full page: resource form, API key form and report panel.

        Args:
            state: Session state to render in the report panel.
            resources_text: Text to show in the resource textarea.
            api_key_configured: Whether an API key is saved.
        """
        key_status = "API key saved" if api_key_configured else "No API key saved"
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{self.TITLE}</title>
<style>{PAGE_STYLE}</style>
</head>
<body>
<header><h1>{self.TITLE}</h1></header>
<main>
  <section class="panel">
    <div class="heading">
      <h2>Cloud Resource Data</h2>
      <a class="sample-link" href="/">Load Sample</a>
    </div>
    <form method="post" action="/analyze">
      <textarea name="resources" spellcheck="false" placeholder="Paste your cloud resource JSON here...">{escape(resources_text)}</textarea>
      <button type="submit">Analyze Resources</button>
    </form>
  </section>
  <section class="panel">
    <h2>Optimization Report</h2>
    <form method="post" action="/api-key">
      <input type="password" name="api_key" placeholder="Enter your API key" autocomplete="off">
      <button type="submit">Save Key</button>
      <span>{key_status}</span>
    </form>
    {self.format_report(state)}
  </section>
</main>
</body>
</html>"""
