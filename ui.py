import streamlit as st


def setup_style():
    st.markdown("""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;700;800&display=swap');

        :root {
            --crust: #8a5a2b;
            --crumb: #fff8ef;
            --text-main: #2b1d12;
            --text-soft: rgba(43, 29, 18, 0.65);
        }

        html, body, .stApp {
            font-family: 'Manrope', sans-serif;
            color: var(--text-main);
            background: linear-gradient(180deg, var(--crumb) 0%, #fbefe0 100%);
        }

        .hb-card {
            border: 1px solid rgba(138, 90, 43, 0.18);
            border-radius: 14px;
            padding: 0.9rem 1rem;
            background: rgba(255, 255, 255, 0.7);
            margin-bottom: 0.8rem;
        }

        .hb-muted {
            color: var(--text-soft);
            font-size: 0.9rem;
        }

        .hb-badge {
            display: inline-block;
            padding: 0.1rem 0.55rem;
            border-radius: 999px;
            font-size: 0.8rem;
            font-weight: 700;
            background: rgba(138, 90, 43, 0.12);
            color: var(--crust);
        }
    </style>
    """, unsafe_allow_html=True)


def badge(text: str) -> str:
    return f"<span class='hb-badge'>{text}</span>"


def format_price(value) -> str:
    if value is None:
        return "—"
    return f"${value:,.2f}"


def update_chart_layout(fig):
    fig.update_layout(
        template="plotly_white",
        font=dict(family="Manrope, sans-serif", size=13, color="#2b1d12"),
        margin=dict(l=20, r=20, t=50, b=20),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(138,90,43,0.04)",
        hovermode="x unified",
        xaxis=dict(showgrid=False, zeroline=False, showline=True, linecolor="rgba(138,90,43,0.28)"),
        yaxis=dict(showgrid=True, gridcolor="rgba(138,90,43,0.12)", zeroline=False),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig
