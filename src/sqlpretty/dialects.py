"""Dialect tables: reserved words and punctuation per SQL variant."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from sqlpretty.config import INLINE_MAX_LENGTH, ROW_LIMIT_WORDS, LexerConfig
from sqlpretty.errors import UnknownDialectError
from sqlpretty.lexer import Lexer


@dataclass(frozen=True, slots=True)
class Dialect:
    """Everything the formatter needs to know about one SQL variant."""

    name: str
    lexer_config: LexerConfig
    inline_max_length: int = INLINE_MAX_LENGTH
    row_limit_words: tuple[str, ...] = ROW_LIMIT_WORDS


def _words(text: str) -> tuple[str, ...]:
    """Split a comma separated word list; entries may contain spaces."""
    return tuple(w.strip() for w in text.split(",") if w.strip())


# ---------------------------------------------------------------------------
# Standard SQL (with MySQL and SQL Server extras)
# ---------------------------------------------------------------------------

STANDARD_SQL = Dialect(
    name="sql",
    lexer_config=LexerConfig(
        reserved_words=_words(
            """
            ACCESSIBLE, ACTION, AGAINST, AGGREGATE, ALGORITHM, ALL, ALTER, ANALYSE,
            ANALYZE, AS, ASC, AUTOCOMMIT, AUTO_INCREMENT, BACKUP, BEGIN, BETWEEN,
            BINLOG, BOTH, CASCADE, CASE, CHANGE, CHANGED, CHARACTER SET, CHARSET,
            CHECK, CHECKSUM, COLLATE, COLLATION, COLUMN, COLUMNS, COMMENT, COMMIT,
            COMMITTED, COMPRESSED, CONCURRENT, CONSTRAINT, CONTAINS, CONVERT,
            CREATE, CROSS, CURRENT_TIMESTAMP, DATABASE, DATABASES, DAY, DAY_HOUR,
            DAY_MINUTE, DAY_SECOND, DEFAULT, DEFINER, DELAYED, DELETE, DESC,
            DESCRIBE, DETERMINISTIC, DISTINCT, DISTINCTROW, DIV, DO, DROP,
            DUMPFILE, DUPLICATE, DYNAMIC, ELSE, ENCLOSED, END, ENGINE, ENGINES,
            ENGINE_TYPE, ESCAPE, ESCAPED, EVENTS, EXEC, EXECUTE, EXISTS, EXPLAIN,
            EXTENDED, FAST, FETCH, FIELDS, FILE, FIRST, FIXED, FLUSH, FOR, FORCE,
            FOREIGN, FULL, FULLTEXT, FUNCTION, GLOBAL, GRANT, GRANTS, GROUP_CONCAT,
            HEAP, HIGH_PRIORITY, HOSTS, HOUR, HOUR_MINUTE, HOUR_SECOND, IDENTIFIED,
            IF, IFNULL, IGNORE, IN, INDEX, INDEXES, INFILE, INSERT, INSERT_ID,
            INSERT_METHOD, INTERVAL, INTO, INVOKER, IS, ISOLATION, KEY, KEYS, KILL,
            LAST_INSERT_ID, LEADING, LEVEL, LIKE, LINEAR, LINES, LOAD, LOCAL, LOCK,
            LOCKS, LOGS, LOW_PRIORITY, MARIA, MASTER, MASTER_CONNECT_RETRY,
            MASTER_HOST, MASTER_LOG_FILE, MATCH, MAX_CONNECTIONS_PER_HOUR,
            MAX_QUERIES_PER_HOUR, MAX_ROWS, MAX_UPDATES_PER_HOUR,
            MAX_USER_CONNECTIONS, MEDIUM, MERGE, MINUTE, MINUTE_SECOND, MIN_ROWS,
            MODE, MONTH, MRG_MYISAM, MYISAM, NAMES, NATURAL, NOT, NULL,
            OFFSET, ON DELETE, ON UPDATE, ON, ONLY, OPEN, OPTIMIZE, OPTION,
            OPTIONALLY, OUTFILE, PACK_KEYS, PAGE, PARTIAL, PARTITION, PARTITIONS,
            PASSWORD, PRIMARY, PRIVILEGES, PROCEDURE, PROCESS, PROCESSLIST, PURGE,
            QUICK, RAID0, RAID_CHUNKS, RAID_CHUNKSIZE, RAID_TYPE, RANGE, READ,
            READ_ONLY, READ_WRITE, REFERENCES, REGEXP, RELOAD, RENAME, REPAIR,
            REPEATABLE, REPLACE, REPLICATION, RESET, RESTORE, RESTRICT, RETURN,
            RETURNS, REVOKE, RLIKE, ROLLBACK, ROW, ROWS, ROW_FORMAT, SECOND,
            SECURITY, SEPARATOR, SERIALIZABLE, SESSION, SHARE, SHOW, SHUTDOWN,
            SLAVE, SONAME, SOUNDS, SQL, SQL_AUTO_IS_NULL, SQL_BIG_RESULT,
            SQL_BIG_SELECTS, SQL_BIG_TABLES, SQL_BUFFER_RESULT, SQL_CACHE,
            SQL_CALC_FOUND_ROWS, SQL_LOG_BIN, SQL_LOG_OFF, SQL_LOG_UPDATE,
            SQL_LOW_PRIORITY_UPDATES, SQL_MAX_JOIN_SIZE, SQL_NO_CACHE,
            SQL_QUOTE_SHOW_CREATE, SQL_SAFE_UPDATES, SQL_SELECT_LIMIT,
            SQL_SLAVE_SKIP_COUNTER, SQL_SMALL_RESULT, SQL_WARNINGS, START,
            STARTING, STATUS, STOP, STORAGE, STRAIGHT_JOIN, STRING, STRIPED, SUPER,
            TABLE, TABLES, TEMPORARY, TERMINATED, THEN, TO, TRAILING,
            TRANSACTIONAL, TRUE, TRUNCATE, TYPE, TYPES, UNCOMMITTED, UNIQUE,
            UNLOCK, UNSIGNED, USAGE, USE, USING, VARIABLES, VIEW, WHEN, WITH, WORK,
            WRITE, YEAR_MONTH
            """
        ),
        reserved_toplevel_words=_words(
            """
            ADD, AFTER, ALTER COLUMN, ALTER TABLE, DELETE FROM, EXCEPT, FETCH FIRST,
            FROM, GO, GROUP BY, HAVING, INSERT INTO, INSERT, INTERSECT, LIMIT,
            MODIFY, ORDER BY, SELECT, SET CURRENT SCHEMA, SET SCHEMA, SET,
            UNION ALL, UNION, UPDATE, VALUES, WHERE
            """
        ),
        reserved_newline_words=_words(
            """
            AND, CROSS APPLY, CROSS JOIN, ELSE, INNER JOIN, JOIN, LEFT JOIN,
            LEFT OUTER JOIN, OR, OUTER APPLY, OUTER JOIN, RIGHT JOIN,
            RIGHT OUTER JOIN, WHEN, XOR
            """
        ),
        string_types=('""', "N''", "''", "``", "[]"),
        open_parens=("(", "CASE"),
        close_parens=(")", "END"),
        indexed_placeholder_types=("?",),
        named_placeholder_types=("@", ":"),
        line_comment_types=("#", "--"),
    ),
)

# ---------------------------------------------------------------------------
# IBM DB2
# ---------------------------------------------------------------------------

DB2 = Dialect(
    name="db2",
    lexer_config=LexerConfig(
        reserved_words=_words(
            """
            ABS, ACTIVATE, ALIAS, ALL, ALLOCATE, ALLOW, ALTER, ANY, ARE, ARRAY, AS,
            ASC, ASENSITIVE, ASSOCIATE, ASUTIME, ASYMMETRIC, AT, ATOMIC,
            ATTRIBUTES, AUDIT, AUTHORIZATION, AUX, AUXILIARY, AVG, BEFORE, BEGIN,
            BETWEEN, BIGINT, BINARY, BLOB, BOOLEAN, BOTH, BUFFERPOOL, BY, CACHE,
            CALL, CALLED, CAPTURE, CARDINALITY, CASCADED, CASE, CAST, CCSID, CEIL,
            CEILING, CHAR, CHARACTER, CHARACTER_LENGTH, CHAR_LENGTH, CHECK, CLOB,
            CLONE, CLOSE, CLUSTER, COALESCE, COLLATE, COLLECT, COLLECTION, COLLID,
            COLUMN, COMMENT, COMMIT, CONCAT, CONDITION, CONNECT, CONNECTION,
            CONSTRAINT, CONTAINS, CONTINUE, CONVERT, CORR, CORRESPONDING, COUNT,
            COUNT_BIG, COVAR_POP, COVAR_SAMP, CREATE, CROSS, CUBE, CUME_DIST,
            CURRENT, CURRENT_DATE, CURRENT_DEFAULT_TRANSFORM_GROUP,
            CURRENT_LC_CTYPE, CURRENT_PATH, CURRENT_ROLE, CURRENT_SCHEMA,
            CURRENT_SERVER, CURRENT_TIME, CURRENT_TIMESTAMP, CURRENT_TIMEZONE,
            CURRENT_USER, CURSOR, CYCLE, DATA, DATABASE, DATAPARTITIONNAME,
            DATAPARTITIONNUM, DATE, DAY, DAYS, DB2GENERAL, DB2GENRL, DB2SQL,
            DBINFO, DBPARTITIONNAME, DBPARTITIONNUM, DEALLOCATE, DEC, DECIMAL,
            DECLARE, DEFAULT, DEFAULTS, DEFINITION, DELETE, DENSERANK,
            DENSE_RANK, DEREF, DESCRIBE, DESCRIPTOR, DETERMINISTIC, DIAGNOSTICS,
            DISABLE, DISALLOW, DISCONNECT, DISTINCT, DO, DOCUMENT, DOUBLE, DROP,
            DSSIZE, DYNAMIC, EACH, EDITPROC, ELEMENT, ELSE, ELSEIF, ENABLE,
            ENCODING, ENCRYPTION, END, END-EXEC, ENDING, ERASE, ESCAPE, EVERY,
            EXCEPTION, EXCLUDING, EXCLUSIVE, EXEC, EXECUTE, EXISTS, EXIT, EXP,
            EXPLAIN, EXTENDED, EXTERNAL, EXTRACT, FALSE, FENCED, FETCH, FIELDPROC,
            FILE, FILTER, FINAL, FIRST, FLOAT, FLOOR, FOR, FOREIGN, FREE, FULL,
            FUNCTION, FUSION, GENERAL, GENERATED, GET, GLOBAL, GOTO, GRANT,
            GRAPHIC, GROUP, GROUPING, HANDLER, HASH, HASHED_VALUE, HINT, HOLD,
            HOUR, HOURS, IDENTITY, IF, IMMEDIATE, IN, INCLUDING, INCLUSIVE,
            INCREMENT, INDEX, INDICATOR, INDICATORS, INF, INFINITY, INHERIT,
            INNER, INOUT, INSENSITIVE, INSERT, INT, INTEGER, INTEGRITY, INTERSECTION,
            INTERVAL, INTO, IS, ISOBID, ISOLATION, ITERATE, JAR, JAVA, KEEP, KEY,
            LABEL, LANGUAGE, LARGE, LATERAL, LC_CTYPE, LEADING, LEAVE, LEFT, LIKE,
            LINKTYPE, LN, LOCAL, LOCALDATE, LOCALE, LOCALTIME, LOCALTIMESTAMP,
            LOCATOR, LOCATORS, LOCK, LOCKMAX, LOCKSIZE, LONG, LOOP, LOWER, MAINTAINED,
            MATCH, MATERIALIZED, MAX, MAXVALUE, MEMBER, MERGE, METHOD, MICROSECOND,
            MICROSECONDS, MIN, MINUTE, MINUTES, MINVALUE, MOD, MODE, MODIFIES,
            MODULE, MONTH, MONTHS, MULTISET, NAN, NATIONAL, NATURAL, NCHAR, NCLOB,
            NEW, NEW_TABLE, NEXTVAL, NO, NOCACHE, NOCYCLE, NODENAME, NODENUMBER,
            NOMAXVALUE, NOMINVALUE, NONE, NOORDER, NORMALIZE, NORMALIZED, NOT,
            NULL, NULLIF, NULLS, NUMERIC, NUMPARTS, OBID, OCTET_LENGTH, OF, OFFSET,
            OLD, OLD_TABLE, ON, ONLY, OPEN, OPTIMIZATION, OPTIMIZE, OPTION, ORDER,
            OUT, OUTER, OVER, OVERLAPS, OVERLAY, OVERRIDING, PACKAGE, PADDED,
            PAGESIZE, PARAMETER, PART, PARTITION, PARTITIONED, PARTITIONING,
            PARTITIONS, PASSWORD, PATH, PERCENTILE_CONT, PERCENTILE_DISC,
            PERCENT_RANK, PIECESIZE, PLAN, POSITION, POWER, PRECISION, PREPARE,
            PREVVAL, PRIMARY, PRIQTY, PRIVILEGES, PROCEDURE, PROGRAM, PSID, PUBLIC,
            QUERY, QUERYNO, RANGE, RANK, READ, READS, REAL, RECOVERY, RECURSIVE,
            REF, REFERENCES, REFERENCING, REFRESH, RELEASE, RENAME, REPEAT, RESET,
            RESIGNAL, RESTART, RESTRICT, RESULT, RESULT_SET_LOCATOR, RETURN,
            RETURNS, REVOKE, RIGHT, ROLE, ROLLBACK, ROLLUP, ROUND_CEILING,
            ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_DOWN, ROUND_HALF_EVEN,
            ROUND_HALF_UP, ROUND_UP, ROUTINE, ROW, ROWNUMBER, ROWS, ROWSET,
            ROW_NUMBER, RRN, RUN, SAVEPOINT, SCHEMA, SCOPE, SCRATCHPAD, SCROLL,
            SEARCH, SECOND, SECONDS, SECQTY, SECURITY, SENSITIVE, SEQUENCE,
            SESSION, SESSION_USER, SIGNAL, SIMILAR, SIMPLE, SMALLINT, SNAN, SOME,
            SOURCE, SPECIFIC, SPECIFICTYPE, SQL, SQLEXCEPTION, SQLID, SQLSTATE,
            SQLWARNING, SQRT, STACKED, STANDARD, START, STARTING, STATEMENT,
            STATIC, STATMENT, STAY, STDDEV_POP, STDDEV_SAMP, STOGROUP, STORES,
            STYLE, SUBMULTISET, SUBSTRING, SUM, SUMMARY, SYMMETRIC, SYNONYM,
            SYSFUN, SYSIBM, SYSPROC, SYSTEM, SYSTEM_USER, TABLE, TABLESAMPLE,
            TABLESPACE, THEN, TIME, TIMESTAMP, TIMEZONE_HOUR, TIMEZONE_MINUTE, TO,
            TRAILING, TRANSACTION, TRANSLATE, TRANSLATION, TREAT, TRIGGER, TRIM,
            TRUE, TRUNCATE, TYPE, UESCAPE, UNDO, UNIQUE, UNKNOWN, UNNEST, UNTIL,
            UPPER, USAGE, USER, USING, VALIDPROC, VALUE, VARCHAR, VARIABLE,
            VARIANT, VARYING, VAR_POP, VAR_SAMP, VCAT, VERSION, VIEW, VOLATILE,
            VOLUMES, WHEN, WHENEVER, WHILE, WIDTH_BUCKET, WINDOW, WITH, WITHIN,
            WITHOUT, WLM, WRITE, XMLELEMENT, XMLEXISTS, XMLNAMESPACES, YEAR, YEARS
            """
        ),
        reserved_toplevel_words=_words(
            """
            ADD, AFTER, ALTER COLUMN, ALTER TABLE, DELETE FROM, EXCEPT, FETCH FIRST,
            FROM, GROUP BY, GO, HAVING, INSERT INTO, INTERSECT, LIMIT, ORDER BY,
            SELECT, SET CURRENT SCHEMA, SET SCHEMA, SET, UNION ALL, UPDATE, VALUES,
            WHERE
            """
        ),
        reserved_newline_words=_words(
            """
            AND, CROSS JOIN, INNER JOIN, JOIN, LEFT JOIN, LEFT OUTER JOIN, OR,
            OUTER JOIN, RIGHT JOIN, RIGHT OUTER JOIN
            """
        ),
        string_types=('""', "''", "``", "[]"),
        open_parens=("(",),
        close_parens=(")",),
        indexed_placeholder_types=("?",),
        named_placeholder_types=(":",),
        line_comment_types=("--",),
        special_word_chars=("#", "@"),
    ),
)

# ---------------------------------------------------------------------------
# Couchbase N1QL
# ---------------------------------------------------------------------------

N1QL = Dialect(
    name="n1ql",
    lexer_config=LexerConfig(
        reserved_words=_words(
            """
            ALL, ALTER, ANALYZE, AND, ANY, ARRAY, AS, ASC, BEGIN, BETWEEN, BINARY,
            BOOLEAN, BREAK, BUCKET, BUILD, BY, CALL, CASE, CAST, CLUSTER, COLLATE,
            COLLECTION, COMMIT, CONNECT, CONTINUE, CORRELATE, COVER, CREATE,
            DATABASE, DATASET, DATASTORE, DECLARE, DECREMENT, DELETE, DERIVED,
            DESC, DESCRIBE, DISTINCT, DO, DROP, EACH, ELEMENT, ELSE, END, EVERY,
            EXCEPT, EXCLUDE, EXECUTE, EXISTS, EXPLAIN, FALSE, FETCH, FIRST,
            FLATTEN, FOR, FORCE, FROM, FUNCTION, GRANT, GROUP, GSI, HAVING, IF,
            IGNORE, ILIKE, IN, INCLUDE, INCREMENT, INDEX, INFER, INLINE, INNER,
            INSERT, INTERSECT, INTO, IS, JOIN, KEY, KEYS, KEYSPACE, KNOWN, LAST,
            LEFT, LET, LETTING, LIKE, LIMIT, LSM, MAP, MAPPING, MATCHED,
            MATERIALIZED, MERGE, MISSING, NAMESPACE, NEST, NOT, NULL, NUMBER,
            OBJECT, OFFSET, ON, OPTION, OR, ORDER, OUTER, OVER, PARSE, PARTITION,
            PASSWORD, PATH, POOL, PREPARE, PRIMARY, PRIVATE, PRIVILEGE, PROCEDURE,
            PUBLIC, RAW, REALM, REDUCE, RENAME, RETURN, RETURNING, REVOKE, RIGHT,
            ROLE, ROLLBACK, SATISFIES, SCHEMA, SELECT, SELF, SEMI, SET, SHOW,
            SOME, START, STATISTICS, STRING, SYSTEM, THEN, TO, TRANSACTION,
            TRIGGER, TRUE, TRUNCATE, UNDER, UNION, UNIQUE, UNKNOWN, UNNEST, UNSET,
            UPDATE, UPSERT, USE, USER, USING, VALIDATE, VALUE, VALUED, VALUES,
            VIA, VIEW, WHEN, WHERE, WHILE, WITH, WITHIN, WORK, XOR
            """
        ),
        reserved_toplevel_words=_words(
            """
            DELETE FROM, EXCEPT ALL, EXCEPT, EXPLAIN DELETE FROM, EXPLAIN UPDATE,
            EXPLAIN UPSERT, FROM, GROUP BY, HAVING, INFER, INSERT INTO,
            INTERSECT ALL, INTERSECT, LET, LIMIT, MERGE, NEST, ORDER BY, PREPARE,
            SELECT, SET CURRENT SCHEMA, SET SCHEMA, SET, UNION ALL, UNION, UNNEST,
            UPDATE, UPSERT, USE KEYS, VALUES, WHERE
            """
        ),
        reserved_newline_words=_words(
            """
            AND, INNER JOIN, JOIN, LEFT JOIN, LEFT OUTER JOIN, OR, OUTER JOIN,
            RIGHT JOIN, RIGHT OUTER JOIN, XOR
            """
        ),
        string_types=('""', "''", "``"),
        open_parens=("(", "[", "{"),
        close_parens=(")", "]", "}"),
        named_placeholder_types=("$",),
        line_comment_types=("#", "--"),
    ),
)

# ---------------------------------------------------------------------------
# Oracle PL/SQL
# ---------------------------------------------------------------------------

PL_SQL = Dialect(
    name="pl/sql",
    lexer_config=LexerConfig(
        reserved_words=_words(
            """
            ACCESSIBLE, AGENT, AGGREGATE, ALL, ALTER, ANY, ARRAY, AS, ASC, AT,
            ATTRIBUTE, AUTHID, AVG, BETWEEN, BFILE_BASE, BINARY_INTEGER, BINARY,
            BLOB_BASE, BLOCK, BODY, BOOLEAN, BOTH, BOUND, BULK, BY, BYTE, CALL,
            CALLING, CASCADE, CASE, CHAR_BASE, CHAR, CHARACTER, CHARSET,
            CHARSETFORM, CHARSETID, CHECK, CLOB_BASE, CLONE, CLOSE, CLUSTER,
            CLUSTERS, COALESCE, COLAUTH, COLLECT, COLUMNS, COMMENT, COMMIT,
            COMMITTED, COMPILED, COMPRESS, CONNECT, CONSTANT, CONSTRUCTOR, CONTEXT,
            CONTINUE, CONVERT, COUNT, CRASH, CREATE, CREDENTIAL, CURRENT, CURRVAL,
            CURSOR, CUSTOMDATUM, DANGLING, DATA, DATE_BASE, DATE, DAY, DECIMAL,
            DEFAULT, DEFINE, DELETE, DESC, DETERMINISTIC, DIRECTORY, DISTINCT,
            DO, DOUBLE, DROP, DURATION, ELEMENT, ELSIF, EMPTY, END, ESCAPE,
            EXCEPTIONS, EXCLUSIVE, EXECUTE, EXISTS, EXIT, EXTENDS, EXTERNAL,
            EXTRACT, FALSE, FETCH, FINAL, FIRST, FIXED, FLOAT, FOR, FORALL, FORCE,
            FROM, FUNCTION, GENERAL, GOTO, GRANT, GROUP, HASH, HEAP, HIDDEN, HOUR,
            IDENTIFIED, IF, IMMEDIATE, IN, INCLUDING, INDEX, INDEXES, INDICATOR,
            INDICES, INFINITE, INSTANTIABLE, INT, INTEGER, INTERFACE, INTERVAL,
            INTO, INVALIDATE, IS, ISOLATION, JAVA, LANGUAGE, LARGE, LEADING,
            LENGTH, LEVEL, LIBRARY, LIKE, LIKE2, LIKE4, LIKEC, LIMITED, LOCAL,
            LOCK, LONG, MAP, MAX, MAXLEN, MEMBER, MERGE, MIN, MINUTE, MLSLABEL,
            MOD, MODE, MONTH, MULTISET, NAME, NAN, NATIONAL, NATIVE, NATURAL,
            NATURALN, NCHAR, NEW, NEXTVAL, NOCOMPRESS, NOCOPY, NOT, NOWAIT, NULL,
            NULLIF, NUMBER_BASE, NUMBER, OBJECT, OCICOLL, OCIDATE, OCIDATETIME,
            OCIDURATION, OCIINTERVAL, OCILOBLOCATOR, OCINUMBER, OCIRAW, OCIREF,
            OCIREFCURSOR, OCIROWID, OCISTRING, OCITYPE, OF, OLD, ON, ONLY, OPAQUE,
            OPEN, OPERATOR, OPTION, ORACLE, ORADATA, ORDER, ORGANIZATION,
            ORLANY, ORLVARY, OTHERS, OUT, OVERLAPS, OVERRIDING, PACKAGE,
            PARALLEL_ENABLE, PARAMETER, PARAMETERS, PARENT, PARTITION, PASCAL,
            PCTFREE, PIPE, PIPELINED, PLS_INTEGER, PLUGGABLE, POSITIVE, POSITIVEN,
            PRAGMA, PRECISION, PRIOR, PRIVATE, PROCEDURE, PUBLIC, RAISE, RANGE,
            RAW, READ, REAL, RECORD, REF, REFERENCE, RELEASE, RELIES_ON, REM,
            REMAINDER, RENAME, RESOURCE, RESULT_CACHE, RESULT, RETURN, RETURNING,
            REVERSE, REVOKE, ROLLBACK, ROW, ROWID, ROWNUM, ROWTYPE, SAMPLE, SAVE,
            SAVEPOINT, SB1, SB2, SB4, SECOND, SEGMENT, SELF, SEPARATE, SEQUENCE,
            SERIALIZABLE, SHARE, SHORT, SIZE_T, SIZE, SMALLINT, SOME, SPACE,
            SPARSE, SQL, SQLCODE, SQLDATA, SQLERRM, SQLNAME, SQLSTATE, STANDARD,
            START, STATIC, STDDEV, STORED, STRING, STRUCT, STYLE, SUBMULTISET,
            SUBPARTITION, SUBSTITUTABLE, SUBTYPE, SUCCESSFUL, SUM, SYNONYM,
            SYSDATE, TABAUTH, TABLE, TDO, THE, THEN, TIME, TIMESTAMP,
            TIMEZONE_ABBR, TIMEZONE_HOUR, TIMEZONE_MINUTE, TIMEZONE_REGION, TO,
            TRAILING, TRANSACTION, TRANSACTIONAL, TRIGGER, TRUE, TRUSTED, TYPE,
            UB1, UB2, UB4, UID, UNDER, UNIQUE, UNPLUG, UNSIGNED, UNTRUSTED, USE,
            USER, USING, VALIST, VALUE, VARIABLE, VARIANCE, VARRAY, VARYING, VIEW,
            VIEWS, VOID, WHENEVER, WHILE, WITH, WORK, WRAPPED, WRITE, YEAR, ZONE
            """
        ),
        reserved_toplevel_words=_words(
            """
            ADD, ALTER COLUMN, ALTER TABLE, BEGIN, CONNECT BY, DECLARE,
            DELETE FROM, DELETE, END, EXCEPT, EXCEPTION, FETCH FIRST, FROM,
            GROUP BY, HAVING, INSERT INTO, INSERT, INTERSECT, LIMIT, LOOP, MODIFY,
            ORDER BY, SELECT, SET CURRENT SCHEMA, SET SCHEMA, SET, START WITH,
            UNION ALL, UNION, UPDATE, VALUES, WHERE
            """
        ),
        reserved_newline_words=_words(
            """
            AND, CROSS APPLY, CROSS JOIN, ELSE, END, INNER JOIN, JOIN, LEFT JOIN,
            LEFT OUTER JOIN, OR, OUTER APPLY, OUTER JOIN, RIGHT JOIN,
            RIGHT OUTER JOIN, WHEN, XOR
            """
        ),
        string_types=('""', "N''", "''", "``"),
        open_parens=("(", "CASE"),
        close_parens=(")", "END"),
        indexed_placeholder_types=("?",),
        named_placeholder_types=(":",),
        line_comment_types=("--",),
        special_word_chars=("_", "$", "#", ".", "@"),
    ),
)


DIALECTS: dict[str, Dialect] = {d.name: d for d in (STANDARD_SQL, DB2, N1QL, PL_SQL)}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name, case-insensitively."""
    try:
        return DIALECTS[name.lower()]
    except KeyError:
        raise UnknownDialectError(name, sorted(DIALECTS)) from None


@lru_cache(maxsize=None)
def get_lexer(name: str) -> Lexer:
    """Return the shared Lexer for a dialect, compiling it on first use."""
    return Lexer(get_dialect(name).lexer_config)
