"""
Outage Agent 主程序入口

使用方式:
    python -m outage_agent
    或
    outage-agent
"""

from outage_agent.main import cli


if __name__ == "__main__":
    cli()
