# backend/app/notifications/__init__.py

"""
通知レイヤ用モジュール群。

市民からの報告（テストカテゴリ）を SMS と Email で担当者に通知する。
実際の SMS / Email 送信はシミュレーションで、送信結果は notification_logs に記録する。

構成イメージ:
- config: 送信先・遅延・Supabase 接続などの設定値
- schemas: チャンネル種別・送信結果・監査ログ・レスポンスのスキーマ
- formatters: SMS 本文 / Email HTML の生成
- senders: SMS / Email 送信インターフェースとシミュレーション実装
- log_store: 監査ログの書き込み先（Supabase / ロガー）
- service: 2 チャンネル並行送信を行う NotificationDispatcher
- factory: アプリ全体で共有する NotificationDispatcher の生成
- router: /send-test-notifications エンドポイント
"""
