"""
Outage Agent - 设备离线检测

负责：
- 接收资产事件，跟踪 UPS / ePDU / 传感器
- 接收指标事件，维护每个资产的最小 TTL 和最后看到时间
- 定期找出沉默超过宽限期（2 * TTL）的资产
- 按端口和父设备查询传感器
"""

__version__ = "1.0.0"
