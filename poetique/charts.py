import plotly.graph_objects as go

from poetique.models import CieEvaluation
from poetique.report import format_mark


def score_gauge(evaluation: CieEvaluation) -> go.Figure:
    max_mark = evaluation.max_mark or 1
    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=evaluation.total_mark,
            number={"suffix": f" / {format_mark(evaluation.max_mark)}"},
            title={"text": f"Predicted mark · Grade {evaluation.grade}"},
            gauge={
                "axis": {"range": [0, max_mark]},
                "bar": {"color": "#4f46e5"},
            },
        )
    )
    fig.update_layout(height=260, margin=dict(l=20, r=20, t=50, b=10))
    return fig
