"""Localised log messages keyed by their Chinese text, formatted with printf verbs."""

from __future__ import annotations

import logging
import re
from typing import Any

ENGLISH = "en"
CHINESE = "zh"

_logger = logging.getLogger("ddnsutil")

_ENGLISH_MESSAGES: dict[str, str] = {
    "可使用 .\\ddns-go.exe -s install 安装服务运行": "You can use '.\\ddns-go.exe -s install' to install service",
    "可使用 sudo ./ddns-go -s install 安装服务运行": "You can use 'sudo ./ddns-go -s install' to install service",
    "监听 %s": "Listen on %s",
    "配置文件已保存在: %s": "Config file has been saved to: %s",
    "你的IP %s 没有变化, 域名 %s": "Your's IP %s has not changed! Domain: %s",
    "新增域名解析 %s 成功! IP: %s": "Added domain %s successfully! IP: %s",
    "新增域名解析 %s 失败! 异常信息: %s": "Added domain %s failed! Result: %s",
    "更新域名解析 %s 成功! IP: %s": "Updated domain %s successfully! IP: %s",
    "更新域名解析 %s 失败! 异常信息: %s": "Updated domain %s failed! Result: %s",
    "你的IPv4未变化, 未触发 %s 请求": "Your's IPv4 has not changed, %s request has not been triggered",
    "你的IPv6未变化, 未触发 %s 请求": "Your's IPv6 has not changed, %s request has not been triggered",
    "Namecheap 不支持更新 IPv6": "Namecheap don't supports IPv6",
    "dynadot仅支持单域名配置，多个域名请添加更多配置": "dynadot only supports single domain configuration, please add more configurations",
    # http
    "异常信息: %s": "Exception: %s",
    "查询域名信息发生异常! %s": "Query domain info failed! %s",
    "返回内容: %s ,返回状态码: %d": "Response body: %s ,Response status code: %d",
    "通过接口获取IPv4失败! 接口地址: %s": "Get IPv4 from %s failed",
    "通过接口获取IPv6失败! 接口地址: %s": "Get IPv6 from %s failed",
    "将不会触发Webhook, 仅在第 3 次失败时触发一次Webhook, 当前失败次数：%d": "Webhook will not be triggered, only trigger once when the third failure, current failure times: %d",
    "在DNS服务商中未找到根域名: %s": "Root domain not found in DNS provider: %s",
    # webhook
    "Webhook配置中的URL不正确": "Webhook url is incorrect",
    "Webhook中的 RequestBody JSON 无效": "Webhook RequestBody JSON is invalid",
    "Webhook调用成功! 返回数据：%s": "Webhook called successfully! Response body: %s",
    "Webhook调用失败! 异常信息：%s": "Webhook called failed! Exception: %s",
    "Webhook Header不正确: %s": "Webhook header is invalid: %s",
    "请输入Webhook的URL": "Please enter the Webhook url",
    # callback
    "Callback的URL不正确": "Callback url is incorrect",
    "Callback调用成功, 域名: %s, IP: %s, 返回数据: %s": "Webhook called successfully! Domain: %s, IP: %s, Response body: %s",
    "Callback调用失败, 异常信息: %s": "Webhook called failed! Exception: %s",
    # save
    "必须输入用户名/密码": "Username/Password is required",
    "密码不安全！尝试使用更复杂的密码": "Password is not secure! Try using a more complex password",
    "数据解析失败, 请刷新页面重试": "Data parsing failed, please refresh the page and try again",
    "第 %s 个配置未填写域名": "The %s config does not fill in the domain",
    # config
    "从网卡获得IPv4失败": "Get IPv4 from network card failed",
    "从网卡中获得IPv4失败! 网卡名: %s": "Get IPv4 from network card failed! Network card name: %s",
    "获取IPv4结果失败! 接口: %s ,返回值: %s": "Get IPv4 result failed! Interface: %s ,Result: %s",
    "获取%s结果失败! 未能成功执行命令：%s, 错误：%q, 退出状态码：%s": "Get %s result failed! Command: %s, Error: %q, Exit status code: %s",
    "获取%s结果失败! 命令: %s, 标准输出: %q": "Get %s result failed! Command: %s, Stdout: %q",
    "从网卡获得IPv6失败": "Get IPv6 from network card failed",
    "从网卡中获得IPv6失败! 网卡名: %s": "Get IPv6 from network card failed! Network card name: %s",
    "获取IPv6结果失败! 接口: %s ,返回值: %s": "Get IPv6 result failed! Interface: %s ,Result: %s",
    "未找到第 %d 个IPv6地址! 将使用第一个IPv6地址": "%dth IPv6 address not found! Will use the first IPv6 address",
    "IPv6匹配表达式 %s 不正确! 最小从1开始": "IPv6 match expression %s is incorrect! Minimum start from 1",
    "IPv6将使用正则表达式 %s 进行匹配": "IPv6 will use regular expression %s for matching",
    "匹配成功! 匹配到地址: %s": "Match successfully! Matched address: %s",
    "没有匹配到任何一个IPv6地址, 将使用第一个地址": "No IPv6 address matched, will use the first address",
    "未能获取IPv4地址, 将不会更新": "Failed to get IPv4 address, will not update",
    "未能获取IPv6地址, 将不会更新": "Failed to get IPv6 address, will not update",
    # domains
    "域名: %s 不正确": "The domain %s is incorrect",
    "域名: %s 解析失败": "The domain %s resolution failed",
    "IPv6未改变, 将等待 %d 次后与DNS服务商进行比对": "IPv6 has not changed, will wait %d times to compare with DNS provider",
    "IPv4未改变, 将等待 %d 次后与DNS服务商进行比对": "IPv4 has not changed, will wait %d times to compare with DNS provider",
    "本机DNS异常! 将默认使用 %s, 可参考文档通过 -dns 自定义 DNS 服务器": "Local DNS exception! Will use %s by default, you can use -dns to customize DNS server",
    "等待网络连接: %s": "Waiting for network connection: %s",
    "%s 后重试...": "Retry after %s",
    "网络已连接": "The network is connected",
    # main
    "监听端口发生异常, 请检查端口是否被占用! %s": "Listen port failed, please check if the port is occupied! %s",
    "Docker中运行, 请在浏览器中打开 http://docker主机IP:9876 进行配置": "Running in Docker, please open http://docker-host-ip:9876 in the browser for configuration",
    "ddns-go 服务卸载成功": "ddns-go service uninstalled successfully",
    "ddns-go 服务卸载失败, 异常信息: %s": "ddns-go service uninstalled failed, Exception: %s",
    "安装 ddns-go 服务成功! 请打开浏览器并进行配置": "Install ddns-go service successfully! Please open the browser and configure it",
    "安装 ddns-go 服务失败, 异常信息: %s": "Install ddns-go service failed, Exception: %s",
    "ddns-go 服务已安装, 无需再次安装": "ddns-go service has been installed, no need to install again",
    "重启 ddns-go 服务成功": "restart ddns-go service successfully",
    "启动 ddns-go 服务成功": "start ddns-go service successfully",
    "ddns-go 服务未安装, 请先安装服务": "ddns-go service is not installed, please install the service first",
    # webhook notifications
    "未改变": "no changed",
    "失败": "failed",
    "成功": "success",
    # login
    "%q 配置文件为空, 超过3小时禁止从公网访问": "%q configuration file is empty, public network access is prohibited for more than 3 hours",
    "%q 被禁止从公网访问": "%q is prohibited from accessing the public network",
    "%q 帐号密码不正确": "%q username or password is incorrect",
    "%q 登录成功": "%q login successfully",
    "用户名或密码错误": "Username or password is incorrect",
    "登录失败次数过多，请等待 %d 分钟后再试": "Too many login failures, please try again after %d minutes",
    "用户名 %s 的密码已重置成功! 请重启ddns-go": "The password of username %s has been reset successfully! Please restart ddns-go",
    "需在 %s 之前完成用户名密码设置,请重启ddns-go": "Need to complete the username and password setting before %s, please restart ddns-go",
}

_VERB_RE = re.compile(r"%([%sdqv])")
_QUOTE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}
_TYPE_NAMES = {str: "string", int: "int", float: "float64", bool: "bool"}


class _State:
    lang: str = ENGLISH


_state = _State()


def _quote(value: Any) -> str:
    parts = ['"']
    for ch in str(value):
        code = ord(ch)
        if ch in _QUOTE_ESCAPES:
            parts.append(_QUOTE_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        elif code < 0x80:
            parts.append(f"\\x{code:02x}")
        elif code < 0x10000:
            parts.append(f"\\u{code:04x}")
        else:
            parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


def _type_name(value: Any) -> str:
    return _TYPE_NAMES.get(type(value), type(value).__name__)


def _format(template: str, args: tuple[Any, ...]) -> str:
    remaining = iter(args)
    used = 0

    def substitute(match: re.Match[str]) -> str:
        nonlocal used
        verb = match.group(1)
        if verb == "%":
            return "%"
        try:
            value = next(remaining)
        except StopIteration:
            return f"%!{verb}(MISSING)"
        used += 1
        if verb == "q":
            return _quote(value)
        if verb == "d":
            if isinstance(value, int) and not isinstance(value, bool):
                return str(value)
            return f"%!d({_type_name(value)}={value})"
        return str(value)

    text = _VERB_RE.sub(substitute, template)
    extra = args[used:]
    if extra:
        listed = ", ".join(f"{_type_name(a)}={a}" for a in extra)
        text += f"%!(EXTRA {listed})"
    return text


def log_str(key: str, *args: Any) -> str:
    """Translate the message key into the current language and format it."""
    template = _ENGLISH_MESSAGES.get(key, key) if _state.lang == ENGLISH else key
    return _format(template, args)


def log(key: str, *args: Any) -> None:
    """Log a translated, formatted message."""
    _logger.info(log_str(key, *args))


def init_log_lang(lang: str) -> str:
    """Choose the log language from a locale name and return its tag."""
    _state.lang = CHINESE if lang.startswith("zh") else ENGLISH
    return _state.lang