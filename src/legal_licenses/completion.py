"""
Shell completion scripts.
"""

from typing import Dict


def get_bash_completion() -> str:
    """Bash completion script."""
    return """
# Bash completion for legal-licenses
_legal_licenses_completion() {
    local cur prev opts
    COMPREPLY=()
    cur="${COMP_WORDS[COMP_CWORD]}"
    prev="${COMP_WORDS[COMP_CWORD-1]}"

    if [[ ${COMP_CWORD} == 1 ]]; then
        opts="generate show info config completion --version --help"
        COMPREPLY=( $(compgen -W "${opts}" -- ${cur}) )
        return 0
    fi

    if [[ "${COMP_WORDS[1]}" == "config" && ${COMP_CWORD} == 2 ]]; then
        opts="init show validate"
        COMPREPLY=( $(compgen -W "${opts}" -- ${cur}) )
        return 0
    fi

    case "${prev}" in
        --manifest)
            COMPREPLY=( $(compgen -f -- ${cur}) )
            return 0
            ;;
        --vendor-dir|--output-dir)
            COMPREPLY=( $(compgen -d -- ${cur}) )
            return 0
            ;;
    esac

    if [[ "${COMP_WORDS[1]}" == "generate" ]]; then
        opts="--hide-version --show-version -hv --csv --markdown --include-license-text --no-license-text --include-dev --no-dev --manifest --vendor-dir --output-dir"
        COMPREPLY=( $(compgen -W "${opts}" -- ${cur}) )
        return 0
    fi

    if [[ "${COMP_WORDS[1]}" == "show" ]]; then
        opts="--hide-version --show-version -hv --include-dev --no-dev --manifest"
        COMPREPLY=( $(compgen -W "${opts}" -- ${cur}) )
        return 0
    fi
}

complete -F _legal_licenses_completion legal-licenses
"""


def get_zsh_completion() -> str:
    """Zsh completion script."""
    return """
#compdef legal-licenses

_legal_licenses() {
    local context state state_descr line
    typeset -A opt_args

    _arguments -C \\
        '1: :_legal_licenses_commands' \\
        '*:: :->args'

    case $state in
        args)
            case $words[1] in
                generate)
                    _arguments \\
                        {--hide-version,-hv}'[Hide dependency version]' \\
                        '--csv[Output csv format]' \\
                        '--markdown[Output Markdown format]' \\
                        '--include-license-text[Append license file contents]' \\
                        '--include-dev[Include development dependencies]' \\
                        '--manifest[Lock file to read]:file:_files' \\
                        '--vendor-dir[Installed dependency directory]:directory:_directories' \\
                        '--output-dir[Directory for the report]:directory:_directories'
                    ;;
                show)
                    _arguments \\
                        {--hide-version,-hv}'[Hide dependency version]' \\
                        '--include-dev[Include development dependencies]' \\
                        '--manifest[Lock file to read]:file:_files'
                    ;;
                config)
                    _arguments '1: :(init show validate)'
                    ;;
                completion)
                    _arguments '1: :(bash zsh fish)'
                    ;;
            esac
            ;;
    esac
}

_legal_licenses_commands() {
    local commands
    commands=(
        'generate:Generate Licenses file from project dependencies'
        'show:List dependencies and their declared licenses'
        'info:Show usage information'
        'config:Configuration management commands'
        'completion:Generate shell completion scripts'
    )
    _describe 'command' commands
}

_legal_licenses "$@"
"""


def get_fish_completion() -> str:
    """Fish completion script."""
    return """
# Fish completion for legal-licenses

complete -c legal-licenses -n '__fish_use_subcommand' -a 'generate' -d 'Generate Licenses file'
complete -c legal-licenses -n '__fish_use_subcommand' -a 'show' -d 'List dependencies'
complete -c legal-licenses -n '__fish_use_subcommand' -a 'info' -d 'Show information'
complete -c legal-licenses -n '__fish_use_subcommand' -a 'config' -d 'Configuration management'
complete -c legal-licenses -n '__fish_use_subcommand' -a 'completion' -d 'Shell completion scripts'
complete -c legal-licenses -n '__fish_use_subcommand' -l version -d 'Show version'

complete -c legal-licenses -n '__fish_seen_subcommand_from generate show' -l hide-version -d 'Hide dependency version'
complete -c legal-licenses -n '__fish_seen_subcommand_from generate show' -l include-dev -d 'Include development dependencies'
complete -c legal-licenses -n '__fish_seen_subcommand_from generate show' -l manifest -d 'Lock file' -F
complete -c legal-licenses -n '__fish_seen_subcommand_from generate' -l csv -d 'Output csv format'
complete -c legal-licenses -n '__fish_seen_subcommand_from generate' -l markdown -d 'Output Markdown format'
complete -c legal-licenses -n '__fish_seen_subcommand_from generate' -l include-license-text -d 'Append license file contents'
complete -c legal-licenses -n '__fish_seen_subcommand_from generate' -l vendor-dir -d 'Installed dependency directory' -x -a "(__fish_complete_directories)"
complete -c legal-licenses -n '__fish_seen_subcommand_from generate' -l output-dir -d 'Report directory' -x -a "(__fish_complete_directories)"

complete -c legal-licenses -n '__fish_seen_subcommand_from config' -a 'init show validate'
complete -c legal-licenses -n '__fish_seen_subcommand_from completion' -a 'bash zsh fish'
"""


def get_completion_scripts() -> Dict[str, str]:
    """Return all completion scripts."""
    return {
        "bash": get_bash_completion(),
        "zsh": get_zsh_completion(),
        "fish": get_fish_completion(),
    }
