"""post-autoload-dump 钩子测试"""

from __future__ import annotations

from pathlib import Path

from installed_dump.handlers import AutoloadDumpEvent, PostAutoloadDumpHandler


def _event(graph, project_dir: Path, **kwargs) -> AutoloadDumpEvent:
    kwargs.setdefault("dev_mode", True)
    return AutoloadDumpEvent(
        repository=graph.repository,
        installation_manager=graph.installation_manager,
        root_package=graph.root_package,
        vendor_dir=str(project_dir / "vendor"),
        **kwargs,
    )


class TestPostAutoloadDumpHandler:
    def test_subscribed_events(self) -> None:
        assert PostAutoloadDumpHandler.subscribed_events() == {"post-autoload-dump": "handle"}

    def test_ignores_foreign_events(self, project_dir: Path) -> None:
        handler = PostAutoloadDumpHandler(cwd=str(project_dir))
        assert handler.handle(object()) is False
        assert handler.handle({"name": "post-install-cmd"}) is False
        assert not (project_dir / "vendor" / "composer" / "installed.php").exists()

    def test_handle_writes_manifest(self, make_graph, project_dir: Path) -> None:
        handler = PostAutoloadDumpHandler(cwd=str(project_dir))
        event = _event(make_graph(), project_dir, dev_mode=False)

        assert handler.handle(event) is True
        text = (project_dir / "vendor" / "composer" / "installed.php").read_text(encoding="utf-8")
        assert "'dev' => false," in text
        assert "'psr/log-implementation' => array(" in text

        # 未变化时第二次不写入
        assert handler.handle(event) is False

    def test_event_sink_receives_progress(self, make_graph, project_dir: Path) -> None:
        lines: list[str] = []

        class Sink:
            def write(self, message: str) -> None:
                lines.append(message)

        PostAutoloadDumpHandler(cwd=str(project_dir)).handle(_event(make_graph(), project_dir, sink=Sink()))
        assert "[HIT] 📦 acme/app (1.0.0)" in lines
