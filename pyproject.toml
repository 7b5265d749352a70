[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sipflow"
version = "0.1.0"
description = "Building blocks for a SIP dialog flow viewer: display filters, call groups, key bindings, media descriptions, message diffs and statistics."
requires-python = ">=3.10"
dependencies = []
keywords = ["sip", "voip", "dialog", "filter", "keybindings", "statistics", "sdp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Log Analysis",
    "Topic :: Communications :: Telephony",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sipflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
