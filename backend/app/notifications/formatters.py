# backend/app/notifications/formatters.py

"""
Report から SMS 本文・Email 件名・Email HTML を組み立てるモジュール。

テンプレートエンジンは使わず、固定フォーマットの文字列テンプレートで生成する。
"""

from __future__ import annotations

import html
from datetime import datetime, timezone
from string import Template

from app.reports.schemas import Report

REPORT_HEADING = "🚨 CivicConnect Test Report"
LOCATION_FALLBACK = "Not specified"
SMS_DESCRIPTION_LIMIT = 100


def format_report_timestamp(value: datetime) -> str:
    """
    報告日時を `M/D/YYYY, h:MM:SS AM` 形式（UTC）に整形する。

    naive な datetime は UTC として扱う。
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)

    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return (
        f"{value.month}/{value.day}/{value.year}, "
        f"{hour}:{value.minute:02d}:{value.second:02d} {meridiem}"
    )


def truncate_description(text: str, limit: int = SMS_DESCRIPTION_LIMIT) -> str:
    """先頭 limit 文字に切り詰め、切り詰めた場合のみ `...` を付ける。"""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def _location_or_fallback(report: Report) -> str:
    return report.location or LOCATION_FALLBACK


def format_report_for_sms(report: Report) -> str:
    """SMS 用の複数行テキストを生成する。"""
    lines = [
        REPORT_HEADING,
        f"Title: {report.title}",
        f"Category: {report.category}",
        f"Location: {_location_or_fallback(report)}",
        f"Priority: {report.priority.value}",
        f"Description: {truncate_description(report.description)}",
        f"Reported: {format_report_timestamp(report.created_at)}",
        f"ID: {report.id}",
    ]
    return "\n".join(lines)


def build_email_subject(report: Report) -> str:
    return f"{REPORT_HEADING}: {report.title}"


_IMAGE_BLOCK_TEMPLATE = Template(
    """
      <div class="field">
        <div class="label">Attached Image:</div>
        <div class="value"><a href="$image_url" target="_blank">View Image</a></div>
      </div>
"""
)

_EMAIL_TEMPLATE = Template(
    """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>CivicConnect Test Report</title>
  <style>
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background: linear-gradient(135deg, #3b82f6, #06b6d4); color: white; padding: 20px; border-radius: 8px 8px 0 0; }
    .content { background: #f8fafc; padding: 20px; border-radius: 0 0 8px 8px; }
    .field { margin-bottom: 15px; }
    .label { font-weight: bold; color: #1e40af; }
    .value { margin-top: 5px; }
    .priority-high { color: #dc2626; font-weight: bold; }
    .priority-medium { color: #d97706; font-weight: bold; }
    .priority-low { color: #059669; font-weight: bold; }
    .footer { text-align: center; margin-top: 20px; color: #6b7280; font-size: 12px; }
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>$heading</h1>
      <p>New civic issue reported through the test category</p>
    </div>

    <div class="content">
      <div class="field">
        <div class="label">Report ID:</div>
        <div class="value"><code>$report_id</code></div>
      </div>

      <div class="field">
        <div class="label">Title:</div>
        <div class="value">$title</div>
      </div>

      <div class="field">
        <div class="label">Category:</div>
        <div class="value">$category</div>
      </div>

      <div class="field">
        <div class="label">Priority:</div>
        <div class="value priority-$priority">$priority_label</div>
      </div>

      <div class="field">
        <div class="label">Location:</div>
        <div class="value">$location</div>
      </div>

      <div class="field">
        <div class="label">Description:</div>
        <div class="value">$description</div>
      </div>

      <div class="field">
        <div class="label">Reported At:</div>
        <div class="value">$reported_at</div>
      </div>
$image_block
    </div>

    <div class="footer">
      <p>This is an automated notification from CivicConnect Test Category</p>
      <p>Please do not reply to this email</p>
    </div>
  </div>
</body>
</html>"""
)


def format_report_for_email(report: Report) -> str:
    """
    Email 用の HTML ドキュメントを生成する。

    - priority に応じて `priority-<level>` クラスで強調する
    - image_url がある場合のみ画像リンクのブロックを含める
    - 差し込む値はすべて HTML エスケープする
    """
    image_block = ""
    if report.image_url:
        image_block = _IMAGE_BLOCK_TEMPLATE.substitute(
            image_url=html.escape(report.image_url, quote=True),
        )

    return _EMAIL_TEMPLATE.substitute(
        heading=REPORT_HEADING,
        report_id=html.escape(report.id),
        title=html.escape(report.title),
        category=html.escape(report.category),
        priority=report.priority.value,
        priority_label=report.priority.value.upper(),
        location=html.escape(_location_or_fallback(report)),
        description=html.escape(report.description),
        reported_at=format_report_timestamp(report.created_at),
        image_block=image_block,
    )
