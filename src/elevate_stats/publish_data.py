import base64
import io
import os
from html import escape

import matplotlib

matplotlib.use('Agg')

import matplotlib.pyplot as plt  # noqa: E402

from elevate_stats.report import Chart, Heading, Table  # noqa: E402

# Cell backgrounds, shared by the stylesheet and the chart
TYPE_COLOURS = {
    'Ride': '#B1D4EC',
    'VirtualRide': '#B1D4EC',
    'Cycling': '#B1D4EC',
    'Walk': '#F1D8C5',
    'Hike': '#F1D8C5',
    'Walking': '#F1D8C5',
    'Run': '#F9F0C2',
    'Rowing': '#B3B8DF',
    'Kayaking': '#ECE9DD',
    'all': '#D6F8E0',
}


def _colour_rules():
    by_colour = {}
    for tag, colour in TYPE_COLOURS.items():
        by_colour.setdefault(colour, []).append(f"td.{tag}")
    return "\n".join(
        f"        {', '.join(selectors)} {{\n            background: {colour};\n        }}"
        for colour, selectors in by_colour.items()
    )


CSS = f"""
        html {{
            font-size: 12pt;
            line-height: 1.2;
        }}
        body {{
            font-family: georgia;
            max-width: 1000px;
            margin: 0 auto;
        }}
        table {{
            border-collapse: collapse;
        }}
        table, th, td {{
            border: 1px solid black;
        }}
        th, td {{
            min-width: 80px;
            padding: 5px;
        }}
        td.number {{
            text-align: right;
        }}
{_colour_rules()}
        td.total, td.all, th {{
            font-weight: bold;
        }}
        th {{
            background: lightgray;
        }}
        img.chart {{
            max-width: 100%;
        }}
"""

# ==============================================================================
# VISUALIZATION ENGINE
# ==============================================================================

def create_mpl_chart(data, title, fig_width=10, fig_height=4):
    """
    Draws a stacked bar chart (one bar per year, one segment per activity type)
    and returns it as a base64 encoded PNG.
    """
    fig, ax = plt.subplots(figsize=(fig_width, fig_height))

    years = [str(year) for year in data.index]
    bottom = [0.0] * len(years)
    for column in data.columns:
        values = [float(v) for v in data[column]]
        if not any(values):
            continue
        ax.bar(years, values, bottom=bottom, label=column, color=TYPE_COLOURS.get(column), edgecolor='white')
        bottom = [b + v for b, v in zip(bottom, values)]

    ax.set_title(title)
    ax.set_ylabel('km')
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc='upper left', fontsize=8)

    buffer = io.BytesIO()
    fig.savefig(buffer, format='png', bbox_inches='tight', dpi=100)
    plt.close(fig)
    return base64.b64encode(buffer.getvalue()).decode('ascii')


# ==============================================================================
# HTML RENDERING
# ==============================================================================

def _render_cell(cell):
    tag = 'th' if cell.header else 'td'
    classes = f' class="{escape(" ".join(cell.classes))}"' if cell.classes else ''
    return f"<{tag}{classes}>{escape(cell.text)}</{tag}>"


def _render_table(table):
    head = "".join(f"<th>{escape(column)}</th>" for column in table.columns)
    body = "\n".join(
        "<tr>" + "".join(_render_cell(cell) for cell in row) + "</tr>"
        for row in table.rows
    )
    return f"<table>\n<thead>\n<tr>{head}</tr>\n</thead>\n<tbody>\n{body}\n</tbody>\n</table>"


def _render_chart(chart, chart_renderer):
    encoded = chart_renderer(chart.data, chart.title)
    return f'<img class="chart" alt="{escape(chart.title)}" src="data:image/png;base64,{encoded}">'


def render_html(report, chart_renderer=create_mpl_chart):
    parts = []
    for block in report.blocks:
        if isinstance(block, Heading):
            parts.append(f"<h{block.level}>{escape(block.text)}</h{block.level}>")
        elif isinstance(block, Table):
            parts.append(_render_table(block))
        elif isinstance(block, Chart):
            parts.append(_render_chart(block, chart_renderer))
        else:
            raise TypeError(f"Unsupported report block: {type(block).__name__}")

    body = "\n".join(parts)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        f"<head>\n<meta charset=\"utf-8\">\n<title>{escape(report.title)}</title>\n<style>{CSS}</style>\n</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )


def publish_report(report, output_file, chart_renderer=create_mpl_chart):
    """
    Renders the report and writes it as a single HTML file.
    Nothing is written unless rendering succeeds.
    """
    html = render_html(report, chart_renderer)

    output_dir = os.path.dirname(output_file)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(html)
    print(f"📸 Saved report: {output_file}")
    return output_file
