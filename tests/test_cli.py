"""Test the command-line interface."""

import json
import pytest
import yaml
from click.testing import CliRunner

from uiuadoc.cli.main import cli


@pytest.fixture
def runner(clean_title_env, temp_dir, monkeypatch):
    # Keep config discovery away from the working tree
    monkeypatch.chdir(temp_dir)
    return CliRunner()


class TestBuild:
    """Test the build command."""

    def test_build_json(self, runner, export_file):
        result = runner.invoke(cli, ['--quiet', 'build', str(export_file), '--title', 'Stacks'])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data['title'] == 'Stacks'
        assert [section['section_type'] for section in data['sections']] == [
            'documentation', 'modules', 'bindings'
        ]

    def test_build_yaml_to_file(self, runner, export_file, temp_dir):
        output = temp_dir / 'summary.yaml'
        result = runner.invoke(cli, ['--quiet', 'build', str(export_file), '-f', 'yaml', '-o', str(output)])

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(output.read_text(encoding='utf-8'))
        assert data['title'] == 'lib.ua'

    def test_build_text(self, runner, export_file):
        result = runner.invoke(cli, ['--quiet', 'build', str(export_file), '-f', 'text'])

        assert result.exit_code == 0, result.output
        assert 'Bindings' in result.stdout
        assert 'Constants (#__constants)' in result.stdout
        assert 'Double |1 [function]' in result.stdout

    def test_missing_main_file_fails(self, runner, export_file, temp_dir):
        config_file = temp_dir / 'custom.yaml'
        config_file.write_text('extraction:\n  main_file: main.ua\n')

        result = runner.invoke(cli, ['--quiet', '--config', str(config_file), 'build', str(export_file)])

        assert result.exit_code == 1
        assert 'Error: Library file not found: main.ua' in result.stderr

    def test_invalid_export_fails(self, runner, temp_dir):
        export_path = temp_dir / 'broken.json'
        export_path.write_text('{not json')

        result = runner.invoke(cli, ['--quiet', 'build', str(export_path)])

        assert result.exit_code == 1
        assert result.stderr.startswith('Error:')


class TestOtherCommands:
    """Test extract, highlight, info and init."""

    def test_extract(self, runner, export_file):
        result = runner.invoke(cli, ['--quiet', 'extract', str(export_file)])

        assert result.exit_code == 0, result.output
        files = json.loads(result.stdout)
        assert [content['file'] for content in files] == ['lib.ua']
        assert files[0]['items'][1]['name'] == 'Double'

    def test_highlight_html(self, runner, export_file, temp_dir):
        source = temp_dir / 'snippet.ua'
        source.write_text('Double 5', encoding='utf-8')

        result = runner.invoke(cli, ['--quiet', 'highlight', str(export_file), str(source), '-f', 'html'])

        assert result.exit_code == 0, result.output
        assert '<span class="code-span binding monadic-function">Double</span>' in result.stdout

    def test_highlight_text(self, runner, export_file, temp_dir):
        source = temp_dir / 'snippet.ua'
        source.write_text('Double 5', encoding='utf-8')

        result = runner.invoke(cli, ['--quiet', 'highlight', str(export_file), str(source), '-f', 'text'])

        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == '[Double|binding monadic-function] [5|number-literal]'

    def test_info(self, runner, export_file):
        result = runner.invoke(cli, ['--quiet', 'info', str(export_file)])

        assert result.exit_code == 0, result.output
        assert 'Main file: lib.ua' in result.stdout
        assert 'Bindings: 6' in result.stdout
        assert 'uiua-modules/dep/lib.ua' in result.stdout

    def test_init(self, runner, temp_dir):
        output = temp_dir / 'generated.yaml'
        result = runner.invoke(cli, ['init', '--output', str(output)])

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(output.read_text(encoding='utf-8'))
        assert data['extraction']['main_file'] == 'lib.ua'

    def test_init_does_not_overwrite_without_confirmation(self, runner, temp_dir):
        output = temp_dir / 'existing.yaml'
        output.write_text('log_level: DEBUG\n')

        result = runner.invoke(cli, ['init', '--output', str(output)], input='n\n')

        assert 'Cancelled.' in result.output
        assert output.read_text() == 'log_level: DEBUG\n'
