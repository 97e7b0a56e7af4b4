from __future__ import annotations

from projclean.config.schema import AppConfig, CleanupOptions


def default_config() -> AppConfig:
    return AppConfig(
        directories={
            "frontend": "src",
            "backend": "backend",
            "database": "database",
            "publicAssets": "public",
        },
        essential_patterns=(
            r"^\.env",
            r"config\.(js|ts|json)$",
            r"package(-lock)?\.json$",
            r"tsconfig.*\.json$",
            r"README\.md$",
            r"\.gitignore$",
            r"server\.js$",
            r"vite\.config\.ts$",
            r"tailwind\.config\.js$",
            r"postcss\.config\.js$",
            r"restart\.ps1$",
        ),
        essential_directories=frozenset(
            {
                "node_modules",
                "src",
                "backend",
                "public",
                "controllers",
                "models",
                "routes",
                "config",
                "components",
                "contexts",
                "pages",
                "services",
                "hooks",
                "utils",
                "lib",
            }
        ),
        artifact_extensions=frozenset({".log", ".tmp", ".temp", ".ds_store", ".bak", "thumbs.db"}),
        access_threshold_days=30,
        backup_dir=".file-backup",
        backup_retention_days=14,
        log_file="cleanup-log.txt",
        extra_empty_directories=("frontend",),
        analysis_skip_directories=("node_modules",),
        large_file_bytes=1024 * 1024,
        unused_factor=3,
        options=CleanupOptions(
            prompt_before_deletion=True,
            remove_empty_directories=True,
            create_backups=True,
        ),
    )
