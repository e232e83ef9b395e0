"""Streamlit UI for the Marketing Analytics Dashboard."""

import logging

import plotly.graph_objects as go
import streamlit as st

from marketing_dashboard.services import DashboardService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Page config
st.set_page_config(
    page_title="Marketing Dashboard",
    page_icon="📈",
    layout="wide",
)

VIEW_LABELS = {
    "demographic": "Demographic View",
    "device": "Device View: Desktop vs Mobile",
    "region": "Regional Performance View",
    "weekly": "Weekly Performance View",
}

BLUE = "#3B82F6"
GREEN = "#10B981"
MAP_COLORS = ["#EC4899", "#10B981", "#3B82F6", "#FACC15"]


def format_number(n: int | float, decimals: int = 0) -> str:
    """Format number with commas."""
    if decimals == 0:
        return f"{int(n):,}"
    return f"{n:,.{decimals}f}"


def format_money(n: int | float) -> str:
    return f"${format_number(n, 2)}"


def create_bar_chart(title: str, data: list[dict], color: str = BLUE) -> go.Figure | None:
    """Bar chart from [{"label", "value"}]; None when there is nothing to plot."""
    if not data:
        return None

    fig = go.Figure(data=[go.Bar(
        x=[d["label"] for d in data],
        y=[d["value"] for d in data],
        marker_color=color,
    )])
    fig.update_layout(title=title, height=350, plot_bgcolor="white")
    return fig


def create_line_chart(title: str, data: list[dict], color: str = BLUE) -> go.Figure | None:
    """Line chart over chronologically ordered weeks."""
    if not data:
        return None

    fig = go.Figure(data=[go.Scatter(
        x=[d["label"] for d in data],
        y=[d["value"] for d in data],
        mode="lines+markers",
        line=dict(color=color, width=3),
        marker=dict(size=8),
    )])
    fig.update_layout(title=title, height=350, plot_bgcolor="white")
    return fig


def create_bubble_map(country_data: list[dict]) -> go.Figure | None:
    """Revenue and spend bubbles per country."""
    if not country_data:
        return None

    fig = go.Figure()
    for idx, c in enumerate(country_data):
        color = MAP_COLORS[idx % len(MAP_COLORS)]
        for metric, offset in (("revenue", 0.3), ("spend", -0.3)):
            fig.add_trace(go.Scattergeo(
                lat=[c["lat"]],
                lon=[c["lng"] + offset],
                text=[f"{c['country']}<br>{metric.title()}: {format_money(c[metric])}"],
                hoverinfo="text",
                marker=dict(
                    size=max(c[metric] ** 0.5 / 4, 4),
                    color=color,
                    opacity=0.5,
                ),
                name=f"{c['country']} {metric}",
            ))

    fig.update_layout(height=500, showlegend=False, geo=dict(showland=True))
    return fig


def create_heat_map(points: list[dict]) -> go.Figure | None:
    """Revenue density over city coordinates."""
    if not points:
        return None

    fig = go.Figure(go.Densitymapbox(
        lat=[p["lat"] for p in points],
        lon=[p["lng"] for p in points],
        z=[p["value"] for p in points],
        radius=30,
        colorscale="YlOrRd",
    ))
    fig.update_layout(
        title="Revenue Heat Map",
        height=500,
        mapbox=dict(
            style="open-street-map",
            center=dict(lat=points[0]["lat"], lon=points[0]["lng"]),
            zoom=3,
        ),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def show_chart(fig: go.Figure | None, title: str) -> None:
    if fig is None:
        st.subheader(title)
        st.info("No data available")
    else:
        st.plotly_chart(fig, use_container_width=True)


def render_demographic(summary: dict) -> None:
    cards = summary["cards"]
    for gender in ("male", "female"):
        st.subheader(f"{gender.title()} Demographic Performance")
        col1, col2, col3 = st.columns(3)
        col1.metric(f"Total Clicks by {gender.title()}s", format_number(cards[f"{gender}_clicks"]))
        col2.metric(f"Total Spend by {gender.title()}s", format_money(cards[f"{gender}_spend"]))
        col3.metric(f"Total Revenue by {gender.title()}s", format_money(cards[f"{gender}_revenue"]))

    col1, col2 = st.columns(2)
    with col1:
        show_chart(
            create_bar_chart("Total Spend by Age Group", summary["charts"]["age_group_spend"]),
            "Total Spend by Age Group",
        )
    with col2:
        show_chart(
            create_bar_chart("Total Revenue by Age Group", summary["charts"]["age_group_revenue"], GREEN),
            "Total Revenue by Age Group",
        )

    st.subheader("Campaign Performance by Male Age Groups")
    st.dataframe(summary["tables"]["male"], use_container_width=True, hide_index=True)
    st.subheader("Campaign Performance by Female Age Groups")
    st.dataframe(summary["tables"]["female"], use_container_width=True, hide_index=True)


def render_device(summary: dict) -> None:
    cards = summary["cards"]
    col1, col2 = st.columns(2)
    col1.metric("Desktop Clicks", format_number(cards["desktop_clicks"]))
    col2.metric("Mobile Clicks", format_number(cards["mobile_clicks"]))
    col1.metric("Desktop Spend", format_money(cards["desktop_spend"]))
    col2.metric("Mobile Spend", format_money(cards["mobile_spend"]))
    col1.metric("Desktop Revenue", format_money(cards["desktop_revenue"]))
    col2.metric("Mobile Revenue", format_money(cards["mobile_revenue"]))

    col1, col2 = st.columns(2)
    with col1:
        show_chart(create_bar_chart("Clicks Comparison", summary["charts"]["clicks"]), "Clicks Comparison")
    with col2:
        show_chart(
            create_bar_chart("Conversions Comparison", summary["charts"]["conversions"], GREEN),
            "Conversions Comparison",
        )

    st.subheader("Device Performance Details")
    rows = [
        {**row, "roas": f"{row['roas']:.2f}" if row["roas"] is not None else "-"}
        for row in summary["tables"]["devices"]
    ]
    st.dataframe(rows, use_container_width=True, hide_index=True)


def render_region(summary: dict) -> None:
    cards = summary["cards"]
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Regions", cards["region_count"])
    col2.metric("Total Revenue", format_money(cards["total_revenue"]))
    col3.metric("Total Spend", format_money(cards["total_spend"]))
    col4.metric("Total Conversions", format_number(cards["total_conversions"]))

    show_chart(create_bubble_map(summary["map"]), "Revenue and Spend by Country")
    show_chart(create_heat_map(summary["heat"]), "Revenue Heat Map")

    st.subheader("Regional Performance Details")
    st.dataframe(summary["tables"]["regions"], use_container_width=True, hide_index=True)


def render_weekly(summary: dict) -> None:
    cards = summary["cards"]
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Weeks", cards["week_count"])
    col2.metric("Total Revenue", format_money(cards["total_revenue"]))
    col3.metric("Total Spend", format_money(cards["total_spend"]))
    col4.metric("Total Clicks", format_number(cards["total_clicks"]))

    st.caption(f"Revenue trend: {summary['revenue_trend']}")

    col1, col2 = st.columns(2)
    with col1:
        show_chart(
            create_line_chart("Revenue by Week", summary["charts"]["revenue_by_week"], GREEN),
            "Revenue by Week",
        )
    with col2:
        show_chart(create_line_chart("Spend by Week", summary["charts"]["spend_by_week"]), "Spend by Week")

    st.subheader("Weekly Performance Details")
    st.dataframe(summary["tables"]["weeks"], use_container_width=True, hide_index=True)


RENDERERS = {
    "demographic": render_demographic,
    "device": render_device,
    "region": render_region,
    "weekly": render_weekly,
}


def main():
    service = DashboardService()

    with st.sidebar:
        st.header("📊 Views")
        view = st.radio(
            "Select a view",
            options=list(VIEW_LABELS),
            format_func=lambda v: VIEW_LABELS[v].split(":")[0],
        )
        st.divider()
        st.caption(f"Data source: {service.settings.data_source}")

    with st.spinner("Loading marketing data..."):
        result = service.build_view(view)
        summary = service.generate_summary_dict(result)

    if summary["error"]:
        st.error(summary["error"])
        return

    st.title(VIEW_LABELS[view])
    RENDERERS[view](summary)

    st.divider()
    snapshot = service.build_snapshot(result.data)
    st.download_button(
        label="📥 Download snapshot (JSON)",
        data=snapshot.to_json(),
        file_name=f"dashboard_snapshot_{snapshot.generated_at:%Y%m%d_%H%M}.json",
        mime="application/json",
    )


if __name__ == "__main__":
    main()
