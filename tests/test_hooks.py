"""Tests for .INSTALL generation from maintainer scripts."""

from archport.hooks import clean_script, generate_install_script
from archport.models import MaintainerScript, PackageMetadata


def _metadata(**scripts):
    metadata = PackageMetadata(name="foo", version="1.0")
    for name, body in scripts.items():
        metadata.scripts[MaintainerScript[name.upper()]] = body
    return metadata


class TestCleanScript:
    """Script body cleanup."""

    def test_removes_shebang_and_set_e(self):
        cleaned = clean_script("#!/bin/sh\nset -e\necho hi\n")
        assert cleaned == "echo hi"

    def test_neutralizes_debian_commands(self):
        cleaned = clean_script("if true; then\n    update-rc.d foo defaults\nfi\n")
        assert cleaned.splitlines() == ["if true; then", "    : # update-rc.d foo defaults", "fi"]

    def test_comments_continuation_lines(self):
        cleaned = clean_script("deb-systemd-helper enable \\\n    foo.service\necho ok\n")
        assert cleaned.splitlines() == [": # deb-systemd-helper enable \\", "# foo.service", "echo ok"]


class TestInstallScript:
    """Mapping Debian scripts onto pacman hook functions."""

    def test_no_scripts(self):
        assert generate_install_script(_metadata()) is None

    def test_blank_scripts_are_ignored(self):
        assert generate_install_script(_metadata(postinst="   \n")) is None

    def test_postinst(self):
        script = generate_install_script(_metadata(postinst="#!/bin/sh\nset -e\necho configured\n"))
        assert "_debian_postinst() (\necho configured\n)" in script
        assert "post_install() {\n    _debian_postinst configure\n}" in script
        assert 'post_upgrade() {\n    _debian_postinst configure "$2"\n}' in script
        assert "set -e" not in script
        assert "#!/bin/sh" not in script

    def test_prerm_and_preinst(self):
        script = generate_install_script(_metadata(preinst="echo pre\n", prerm="echo rm\n"))
        assert "pre_install() {\n    _debian_preinst install\n}" in script
        assert "pre_remove() {\n    _debian_prerm remove\n}" in script
        assert (
            'pre_upgrade() {\n    _debian_prerm upgrade "$2"\n    _debian_preinst upgrade "$2"\n}' in script
        )

    def test_postrm_runs_purge_on_remove(self):
        script = generate_install_script(_metadata(postrm="rm -rf /var/lib/foo\n"))
        assert "post_remove() {\n    _debian_postrm purge\n}" in script

    def test_only_debian_commands_keep_valid_body(self):
        script = generate_install_script(_metadata(postinst="#!/bin/sh\nupdate-rc.d foo defaults\n"))
        assert "_debian_postinst() (\n: # update-rc.d foo defaults\n)" in script

    def test_comment_only_body_gets_noop(self):
        script = generate_install_script(_metadata(postinst="#!/bin/sh\n# nothing to do\n"))
        assert "_debian_postinst() (\n# nothing to do\n:\n)" in script
