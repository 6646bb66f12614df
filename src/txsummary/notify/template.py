#!/usr/bin/env python3
"""
Summary Email Template

Renders a Summary as a self-contained HTML email body, plus a plain-text
alternative for clients that do not display HTML.
"""

from datetime import date
from html import escape
from string import Template

from ..core.currency import format_dollars
from ..core.summary import Summary

_PAGE = Template(
    """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Your Account Summary</title>
    <style>
        body { font-family: Helvetica, Arial, sans-serif; line-height: 1.6; color: #333333;
               max-width: 600px; margin: 0 auto; padding: 20px; background-color: #F0F0F5; }
        .container { background-color: #FFFFFF; padding: 35px; border-radius: 12px; }
        .title { font-size: 26px; font-weight: 600; color: #0E5858; text-align: center; }
        .balance-section { text-align: center; margin-bottom: 35px; }
        .balance-label { font-size: 16px; color: #555555; }
        .balance-amount { font-size: 36px; font-weight: 700; color: #0E5858; }
        .section-title { font-size: 20px; font-weight: 600; color: #0E5858;
                         border-bottom: 1px solid #DCDCDC; padding-bottom: 12px; }
        .transaction-item, .average-item { display: flex; justify-content: space-between;
                                           padding: 16px 8px; border-bottom: 1px solid #E9E9E9; }
        .credit { color: #1A7A7A; font-weight: 700; }
        .debit { color: #D32F2F; font-weight: 700; }
        .no-transactions { text-align: center; color: #666666; font-style: italic; padding: 25px; }
        .footer { text-align: center; margin-top: 40px; color: #777777; font-size: 13px; }
    </style>
</head>
<body>
    <div class="container">
        <div class="title">Your Account Summary</div>
        <div class="balance-section">
            <div class="balance-label">Total balance</div>
            <div class="balance-amount">$balance</div>
        </div>
$body
        <div class="footer">
            <p>This is an automated message. Please do not reply directly to this email.</p>
            <p>&copy; $year txsummary</p>
        </div>
    </div>
</body>
</html>
"""
)

_MONTH_ITEM = Template(
    """            <div class="transaction-item">
                <span class="item-label">Number of transactions in $month:</span>
                <span class="item-value"><strong>$count</strong></span>
            </div>"""
)

_AVERAGE_ITEM = Template(
    """            <div class="average-item">
                <span class="item-label">$label</span>
                <span class="$css">$value</span>
            </div>"""
)

_NO_AVERAGES = """            <div class="average-item">
                <span class="item-label">No credit or debit transactions.</span>
            </div>"""

_NO_TRANSACTIONS = """        <div class="no-transactions">
            There were no transactions in the processed file.
        </div>"""


def render_summary_html(summary: Summary, current_year: int | None = None) -> str:
    """
    Render the HTML email body for a summary.

    Args:
        summary: Aggregated statistics to present
        current_year: Year shown in the footer (default: this year)

    Returns:
        Complete HTML document
    """
    if current_year is None:
        current_year = date.today().year

    if summary.has_transactions():
        body = "\n".join(
            [
                '        <div class="section">',
                '            <div class="section-title">Monthly transactions</div>',
                *(
                    _MONTH_ITEM.substitute(month=escape(month), count=count)
                    for month, count in summary.sorted_monthly_counts()
                ),
                "        </div>",
                '        <div class="section">',
                '            <div class="section-title">Average amounts</div>',
                *_average_items(summary),
                "        </div>",
            ]
        )
    else:
        body = _NO_TRANSACTIONS

    return _PAGE.substitute(
        balance=escape(format_dollars(summary.total_balance.to_decimal())),
        body=body,
        year=current_year,
    )


def _average_items(summary: Summary) -> list[str]:
    items = []
    if not summary.average_credit.is_zero():
        items.append(
            _AVERAGE_ITEM.substitute(
                label="Average credit amount:",
                css="credit",
                value=escape(format_dollars(summary.average_credit.to_decimal(), show_plus=True)),
            )
        )
    if not summary.average_debit.is_zero():
        items.append(
            _AVERAGE_ITEM.substitute(
                label="Average debit amount:",
                css="debit",
                value=escape(format_dollars(-summary.average_debit.to_decimal())),
            )
        )
    if not items:
        items.append(_NO_AVERAGES)
    return items


def render_summary_text(summary: Summary) -> str:
    """Render a plain-text version of the summary."""
    lines = [f"Total balance is {format_dollars(summary.total_balance.to_decimal())}"]
    if not summary.has_transactions():
        lines.append("There were no transactions in the processed file.")
        return "\n".join(lines) + "\n"

    for month, count in summary.sorted_monthly_counts():
        lines.append(f"Number of transactions in {month}: {count}")
    if not summary.average_credit.is_zero():
        lines.append(f"Average credit amount: {format_dollars(summary.average_credit.to_decimal(), show_plus=True)}")
    if not summary.average_debit.is_zero():
        lines.append(f"Average debit amount: {format_dollars(-summary.average_debit.to_decimal())}")
    return "\n".join(lines) + "\n"
